"""CREATE2 address derivation and related hashing helpers.

Everything here is pure: the same inputs always produce the same address,
bit-for-bit identical to what the EVM computes for ``CREATE2``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import encode as abi_encode
from eth_utils import keccak, to_checksum_address

CREATE2_PREFIX = b"\xff"
SALT_BYTES = 32
ADDRESS_BYTES = 20
HASH_BYTES = 32


def _hex_to_bytes(value: str) -> bytes:
    raw = value[2:] if value.lower().startswith("0x") else value
    if len(raw) % 2:
        raw = "0" + raw
    return bytes.fromhex(raw)


def _fixed_bytes(value: str | bytes, width: int, label: str) -> bytes:
    raw = bytes(value) if isinstance(value, (bytes, bytearray)) else _hex_to_bytes(value)
    if len(raw) != width:
        raise ValueError(f"{label} must be {width} bytes, got {len(raw)}")
    return raw


def address_to_bytes(address: str | bytes) -> bytes:
    return _fixed_bytes(address, ADDRESS_BYTES, "address")


def hash_to_bytes(value: str | bytes, label: str = "hash") -> bytes:
    return _fixed_bytes(value, HASH_BYTES, label)


def address_to_int(address: str | bytes) -> int:
    return int.from_bytes(address_to_bytes(address), "big")


def int_to_address(value: int) -> str:
    if value < 0 or value >= 1 << 160:
        raise ValueError(f"Value out of address range: {value}")
    return to_checksum_address("0x" + value.to_bytes(ADDRESS_BYTES, "big").hex())


def salt_to_bytes(salt: int | str | bytes) -> bytes:
    if isinstance(salt, int) and not isinstance(salt, bool):
        if salt < 0 or salt >= 1 << 256:
            raise ValueError(f"Salt out of uint256 range: {salt}")
        return salt.to_bytes(SALT_BYTES, "big")
    return _fixed_bytes(salt, SALT_BYTES, "salt")


def salt_to_hex(salt: int | str | bytes) -> str:
    return "0x" + salt_to_bytes(salt).hex()


def compute_create2_address(
    deployer: str | bytes,
    salt: int | str | bytes,
    init_code_hash: str | bytes,
) -> str:
    """Return the checksummed address ``deployer`` produces for ``salt``.

    ``keccak256(0xff ++ deployer ++ salt ++ initCodeHash)[12:]``
    """
    buf = (
        CREATE2_PREFIX
        + address_to_bytes(deployer)
        + salt_to_bytes(salt)
        + hash_to_bytes(init_code_hash, "init code hash")
    )
    return to_checksum_address("0x" + keccak(buf)[-ADDRESS_BYTES:].hex())


def init_code_hash(
    bytecode: str | bytes,
    arg_types: Sequence[str] = (),
    args: Sequence[Any] = (),
) -> bytes:
    """keccak256 of creation bytecode followed by ABI-encoded constructor args."""
    code = bytes(bytecode) if isinstance(bytecode, (bytes, bytearray)) else _hex_to_bytes(bytecode)
    if not code:
        raise ValueError("bytecode is empty")
    encoded = abi_encode(list(arg_types), list(args)) if arg_types else b""
    return keccak(code + encoded)


def sort_currencies(currency_a: str, currency_b: str) -> tuple[str, str]:
    a = to_checksum_address(currency_a)
    b = to_checksum_address(currency_b)
    return (a, b) if int(a, 16) < int(b, 16) else (b, a)


def compute_pool_id(
    *,
    currency0: str,
    currency1: str,
    fee: int,
    tick_spacing: int,
    hooks: str,
) -> str:
    encoded = abi_encode(
        ["address", "address", "uint24", "int24", "address"],
        [
            to_checksum_address(currency0),
            to_checksum_address(currency1),
            int(fee),
            int(tick_spacing),
            to_checksum_address(hooks),
        ],
    )
    return "0x" + keccak(encoded).hex()


def create2_address_int(deployer: bytes, salt: bytes, code_hash: bytes) -> int:
    """Integer form of the CREATE2 address for pre-validated raw inputs.

    Used inside mining loops where checksumming every candidate is wasted work.
    """
    digest = keccak(CREATE2_PREFIX + deployer + salt + code_hash)
    return int.from_bytes(digest[-ADDRESS_BYTES:], "big")
