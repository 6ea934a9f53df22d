"""Salt mining for hook + token pairs deployed with a shared CREATE2 salt.

The dynamic-auction hook must live at an address whose low bits encode its
Uniswap v4 permissions, and the asset deployed with the same salt must sort on
the correct side of the numeraire. Address derivation is not invertible, so
the only way to find such a salt is to walk the salt space.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from doppler_paths.core.constants.base import DEFAULT_HOOK_MINING_ATTEMPTS
from doppler_paths.core.errors import MiningExhausted
from doppler_paths.core.utils.create2 import (
    address_to_bytes,
    address_to_int,
    create2_address_int,
    hash_to_bytes,
    int_to_address,
    salt_to_bytes,
)
from doppler_paths.core.utils.ordering import is_token0_expected


@dataclass(frozen=True)
class MinedSalt:
    salt: bytes
    hook: str
    token: str
    attempts: int

    @property
    def salt_hex(self) -> str:
        return "0x" + self.salt.hex()


def mine_hook_and_token(
    hook_deployer: str,
    hook_init_code_hash: str | bytes,
    token_deployer: str,
    token_init_code_hash: str | bytes,
    numeraire: str,
    *,
    required_flags: int,
    flag_mask: int,
    max_attempts: int = DEFAULT_HOOK_MINING_ATTEMPTS,
    start_salt: int = 0,
) -> MinedSalt:
    """Find the first salt from ``start_salt`` upward accepted for both contracts.

    A salt is accepted when ``hook & flag_mask == required_flags`` and the
    token address sorts on the side of ``numeraire`` chosen by
    :func:`is_token0_expected`. Raises :class:`MiningExhausted` once
    ``max_attempts`` salts have been rejected.
    """
    if max_attempts <= 0:
        raise ValueError("max_attempts must be positive")
    if start_salt < 0:
        raise ValueError("start_salt cannot be negative")
    if required_flags & ~flag_mask:
        raise ValueError("required_flags has bits outside flag_mask")

    hook_deployer_raw = address_to_bytes(hook_deployer)
    token_deployer_raw = address_to_bytes(token_deployer)
    hook_hash = hash_to_bytes(hook_init_code_hash, "hook init code hash")
    token_hash = hash_to_bytes(token_init_code_hash, "token init code hash")

    numeraire_int = address_to_int(numeraire)
    is_token0 = is_token0_expected(numeraire_int)

    logger.debug(
        f"Mining hook/token salt from {start_salt} "
        f"(max_attempts={max_attempts}, is_token0={is_token0})"
    )

    for offset in range(max_attempts):
        salt = salt_to_bytes(start_salt + offset)
        hook = create2_address_int(hook_deployer_raw, salt, hook_hash)
        if hook & flag_mask != required_flags:
            continue

        token = create2_address_int(token_deployer_raw, salt, token_hash)
        if is_token0:
            ordered = token < numeraire_int
        else:
            ordered = token > numeraire_int
        if not ordered:
            continue

        logger.debug(f"Mined salt 0x{salt.hex()} after {offset + 1} attempts")
        return MinedSalt(
            salt=salt,
            hook=int_to_address(hook),
            token=int_to_address(token),
            attempts=offset + 1,
        )

    raise MiningExhausted(
        max_attempts,
        f"Could not find a hook/token salt within {max_attempts} attempts "
        f"(flags=0x{required_flags:x}, mask=0x{flag_mask:x}, numeraire={numeraire})",
    )
