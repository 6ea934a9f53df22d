"""Salt search driven by an external token-address predictor.

Used when the asset address cannot be derived locally (it depends on remote
contract state), so each candidate salt is evaluated by simulating the
deployment against chain state.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from doppler_paths.core.constants.base import DEFAULT_ORDER_MINING_ATTEMPTS
from doppler_paths.core.errors import MiningExhausted, PredictionFailed
from doppler_paths.core.utils.create2 import (
    ADDRESS_BYTES,
    SALT_BYTES,
    address_to_bytes,
    address_to_int,
    int_to_address,
)
from doppler_paths.core.utils.ordering import is_token0_expected, token_order_satisfied

TokenPredictor = Callable[[bytes], Awaitable[str]]
Clock = Callable[[], int]


@dataclass(frozen=True)
class OrderedSalt:
    salt: bytes
    token: str
    attempts: int

    @property
    def salt_hex(self) -> str:
        return "0x" + self.salt.hex()


def generate_salt(account: str | bytes, *, clock: Clock = time.monotonic_ns) -> bytes:
    """Derive a 32-byte salt seed from ``account`` and a clock reading.

    Deterministic when ``clock`` is deterministic.
    """
    seed = bytearray(range(SALT_BYTES))
    tick = clock() % (1 << (8 * SALT_BYTES))
    for i, b in enumerate(tick.to_bytes(SALT_BYTES, "big")):
        seed[i] ^= b
    for i, b in enumerate(address_to_bytes(account)):
        seed[i] ^= b
    return bytes(seed)


def _seed_account(account: str | bytes, attempt: int) -> str:
    return int_to_address((address_to_int(account) + attempt) % (1 << (8 * ADDRESS_BYTES)))


async def mine_ordering(
    seed_account: str,
    predict_token: TokenPredictor,
    numeraire: str,
    *,
    max_attempts: int = DEFAULT_ORDER_MINING_ATTEMPTS,
    clock: Clock = time.monotonic_ns,
) -> OrderedSalt:
    """Find a salt whose predicted asset sorts on the required side of ``numeraire``.

    Predictions are awaited one at a time so attempt order is reproducible.
    A predictor error aborts the search as :class:`PredictionFailed`; running
    out of attempts raises :class:`MiningExhausted`.
    """
    if max_attempts <= 0:
        raise ValueError("max_attempts must be positive")

    is_token0 = is_token0_expected(numeraire)
    numeraire_int = address_to_int(numeraire)

    for attempt in range(max_attempts):
        salt = generate_salt(_seed_account(seed_account, attempt), clock=clock)
        try:
            token = await predict_token(salt)
            token_int = address_to_int(token)
        except Exception as exc:
            raise PredictionFailed(salt, attempt, exc) from exc

        if token_order_satisfied(token_int, numeraire_int, is_token0):
            logger.debug(
                f"Salt 0x{salt.hex()} yields {token} on the "
                f"{'token0' if is_token0 else 'token1'} side after {attempt + 1} attempts"
            )
            return OrderedSalt(salt=salt, token=token, attempts=attempt + 1)

        logger.debug(f"Attempt {attempt}: predicted {token} sorts on the wrong side")

    raise MiningExhausted(
        max_attempts,
        f"Could not order asset against numeraire {numeraire} within {max_attempts} attempts",
    )
