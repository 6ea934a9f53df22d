from __future__ import annotations

import pytest
from eth_utils import keccak

from doppler_paths.core.constants import ZERO_ADDRESS
from doppler_paths.core.utils.create2 import (
    address_to_int,
    compute_create2_address,
    compute_pool_id,
    create2_address_int,
    hash_to_bytes,
    init_code_hash,
    int_to_address,
    salt_to_bytes,
    salt_to_hex,
    sort_currencies,
)

DEADBEEF_DEPLOYER = "0xdeadbeef00000000000000000000000000000000"

# EIP-1014 reference vectors
EIP1014_VECTORS = [
    (ZERO_ADDRESS, 0, b"\x00", "0x4D1A2e2bB4F88F0250f26Ffff098B0b30B26BF38"),
    (DEADBEEF_DEPLOYER, 0, b"\x00", "0xB928f69Bb1D91Cd65274e3c79d8986362984fDA3"),
    (
        DEADBEEF_DEPLOYER,
        "0x000000000000000000000000feed000000000000000000000000000000000000",
        b"\x00",
        "0xD04116cDd17beBE565EB2422F2497E06cC1C9833",
    ),
    (ZERO_ADDRESS, 0, bytes.fromhex("deadbeef"), "0x70f2b2914A2a4b783FaEFb75f459A580616Fcb5e"),
]


@pytest.mark.parametrize("deployer,salt,init_code,expected", EIP1014_VECTORS)
def test_compute_create2_address_matches_reference(deployer, salt, init_code, expected):
    assert compute_create2_address(deployer, salt, keccak(init_code)) == expected


def test_compute_create2_address_is_deterministic():
    code_hash = keccak(b"\x60\x00")
    first = compute_create2_address(DEADBEEF_DEPLOYER, 42, code_hash)
    second = compute_create2_address(DEADBEEF_DEPLOYER, salt_to_hex(42), code_hash)
    assert first == second
    assert first != compute_create2_address(DEADBEEF_DEPLOYER, 43, code_hash)


def test_create2_address_int_agrees_with_checksummed_form():
    code_hash = keccak(b"\x00")
    deployer = bytes.fromhex(DEADBEEF_DEPLOYER[2:])
    for salt in range(5):
        raw = create2_address_int(deployer, salt_to_bytes(salt), code_hash)
        assert int_to_address(raw) == compute_create2_address(
            DEADBEEF_DEPLOYER, salt, code_hash
        )


def test_salt_encoding():
    assert salt_to_bytes(1) == b"\x00" * 31 + b"\x01"
    assert salt_to_hex(255).endswith("ff")
    assert len(salt_to_hex(0)) == 66


def test_salt_rejects_bad_width_and_range():
    with pytest.raises(ValueError):
        salt_to_bytes("0x1234")
    with pytest.raises(ValueError):
        salt_to_bytes(-1)
    with pytest.raises(ValueError):
        salt_to_bytes(1 << 256)


def test_compute_create2_address_rejects_short_inputs():
    with pytest.raises(ValueError):
        compute_create2_address("0x1234", 0, keccak(b""))
    with pytest.raises(ValueError):
        compute_create2_address(DEADBEEF_DEPLOYER, 0, b"\x00" * 31)


def test_hash_to_bytes_accepts_hex_and_labels_errors():
    digest = keccak(b"")
    assert hash_to_bytes("0x" + digest.hex()) == digest
    assert hash_to_bytes(bytearray(digest)) == digest
    with pytest.raises(ValueError, match="token init code hash must be 32 bytes, got 31"):
        hash_to_bytes(digest[:31], "token init code hash")


def test_init_code_hash_appends_constructor_args():
    bytecode = "0x6080"
    bare = init_code_hash(bytecode)
    with_args = init_code_hash(bytecode, ["uint256"], [7])
    assert bare == keccak(bytes.fromhex("6080"))
    assert with_args == keccak(bytes.fromhex("6080") + (7).to_bytes(32, "big"))


def test_init_code_hash_rejects_empty_bytecode():
    with pytest.raises(ValueError):
        init_code_hash(b"")


def test_address_int_round_trip_edges():
    assert address_to_int(ZERO_ADDRESS) == 0
    assert int_to_address(0) == ZERO_ADDRESS
    assert address_to_int(int_to_address(2**160 - 1)) == 2**160 - 1
    with pytest.raises(ValueError):
        int_to_address(2**160)


def test_sort_currencies_and_pool_id():
    low = "0x1111111111111111111111111111111111111111"
    high = "0x3333333333333333333333333333333333333333"
    assert sort_currencies(high, low) == sort_currencies(low, high)
    c0, c1 = sort_currencies(high, low)
    assert int(c0, 16) < int(c1, 16)

    pid = compute_pool_id(
        currency0=c0, currency1=c1, fee=3000, tick_spacing=60, hooks=ZERO_ADDRESS
    )
    assert pid.startswith("0x") and len(pid) == 66
    assert pid != compute_pool_id(
        currency0=c0, currency1=c1, fee=500, tick_spacing=60, hooks=ZERO_ADDRESS
    )
