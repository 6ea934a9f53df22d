"""Token ordering and hook-permission predicates shared by the salt miners."""

from __future__ import annotations

from doppler_paths.core.utils.create2 import address_to_int

# Numeraires above this value leave little room above them, so the asset is
# mined to sort below the numeraire instead.
HALF_MAX_UINT160 = 2**159 - 1


def is_token0_expected(numeraire: str | bytes | int) -> bool:
    """Whether the launched asset must end up as ``currency0`` of the pool.

    Three regimes:
      - numeraire is the zero address (native ETH): asset is token1
      - numeraire above ``2**159 - 1``: asset is token0 (sorts below it)
      - anything else: asset is token1 (sorts above it)
    """
    value = numeraire if isinstance(numeraire, int) else address_to_int(numeraire)
    if value == 0:
        return False
    elif value > HALF_MAX_UINT160:
        return True
    else:
        return False


def token_order_satisfied(
    token: str | bytes | int, numeraire: str | bytes | int, is_token0: bool
) -> bool:
    token_int = token if isinstance(token, int) else address_to_int(token)
    numeraire_int = numeraire if isinstance(numeraire, int) else address_to_int(numeraire)
    if is_token0:
        return token_int < numeraire_int
    return token_int > numeraire_int


def hook_flags_match(
    hook: str | bytes | int, flag_mask: int, required_flags: int
) -> bool:
    hook_int = hook if isinstance(hook, int) else address_to_int(hook)
    return (hook_int & flag_mask) == required_flags
