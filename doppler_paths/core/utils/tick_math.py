"""Pure Uniswap tick helpers. No I/O."""

from __future__ import annotations

import math


MIN_TICK = -887272
MAX_TICK = 887272

TICK_BASE = 1.0001


def price_to_tick(price: float, *, round_up: bool = False) -> int:
    """Convert price (token1/token0) to tick (rounds down unless ``round_up``)."""
    if price <= 0:
        raise ValueError("price must be positive")
    exact = math.log(price, TICK_BASE)
    return int(math.ceil(exact)) if round_up else int(math.floor(exact))


def round_tick_down(tick: int, spacing: int) -> int:
    """Round tick down (toward negative infinity) to a multiple of spacing."""
    # Python's // floors toward -inf
    return (tick // spacing) * spacing


def round_tick_up(tick: int, spacing: int) -> int:
    """Round tick up (toward positive infinity) to a multiple of spacing."""
    return -((-tick) // spacing) * spacing


def max_usable_tick(spacing: int, max_tick: int = MAX_TICK) -> int:
    """Largest multiple of ``spacing`` that does not exceed ``max_tick``."""
    if spacing <= 0:
        raise ValueError("tick spacing must be positive")
    return (max_tick // spacing) * spacing


def check_tick(tick: int, *, min_tick: int = MIN_TICK, max_tick: int = MAX_TICK) -> int:
    if tick < min_tick or tick > max_tick:
        raise ValueError(f"Tick out of bounds: {tick}")
    return tick
