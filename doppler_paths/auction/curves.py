"""Validation and normalization of multicurve liquidity distributions.

Each curve carries a share of the tokens being sold (in WAD). The initializer
requires the shares to add up to exactly one WAD, so a short distribution is
topped up with a filler curve that runs from the highest curve to the top of
the usable tick range.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from doppler_paths.core.constants.base import WAD
from doppler_paths.core.errors import CurveError, CurveErrorKind
from doppler_paths.core.utils.tick_math import MAX_TICK, max_usable_tick

NON_POSITIVE_TICK_WARNING = (
    "Using negative or zero ticks in multicurve configuration. "
    "Please verify this is intentional before proceeding."
)


@dataclass(frozen=True)
class Curve:
    tick_lower: int
    tick_upper: int
    num_positions: int
    shares: int

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.tick_lower, self.tick_upper, self.num_positions, self.shares)


def _is_integral(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def _validate_curve(index: int, curve: Curve) -> None:
    if not (_is_integral(curve.tick_lower) and _is_integral(curve.tick_upper)):
        raise CurveError(
            CurveErrorKind.NON_MONOTONIC_TICKS, index, "ticks must be finite integers"
        )
    if curve.tick_lower >= curve.tick_upper:
        raise CurveError(
            CurveErrorKind.NON_MONOTONIC_TICKS,
            index,
            f"tickLower ({curve.tick_lower}) must be less than tickUpper ({curve.tick_upper})",
        )
    if not _is_integral(curve.num_positions) or curve.num_positions <= 0:
        raise CurveError(
            CurveErrorKind.NON_POSITIVE_FIELD,
            index,
            "numPositions must be a positive integer",
        )
    if not _is_integral(curve.shares) or curve.shares <= 0:
        raise CurveError(
            CurveErrorKind.NON_POSITIVE_FIELD, index, "shares must be greater than zero"
        )


def normalize_curves(
    curves: Sequence[Curve],
    tick_spacing: int,
    total_target: int = WAD,
    *,
    max_tick: int = MAX_TICK,
) -> list[Curve]:
    """Validate ``curves`` and pad them so their shares total ``total_target``.

    Curves are checked in order and the first violation raises
    :class:`CurveError` carrying the curve index. If the shares fall short, one
    filler curve is appended spanning from the highest ``tick_upper`` to the
    highest usable tick, reusing the last curve's ``num_positions``.
    """
    if tick_spacing <= 0:
        raise ValueError("Tick spacing must be positive")
    if not curves:
        raise CurveError(
            CurveErrorKind.NON_POSITIVE_FIELD, None, "at least one curve is required"
        )

    running_total = 0
    for index, curve in enumerate(curves):
        _validate_curve(index, curve)
        if curve.tick_lower <= 0 or curve.tick_upper <= 0:
            logger.warning(f"Curve {index}: {NON_POSITIVE_TICK_WARNING}")
        running_total += int(curve.shares)
        if running_total > total_target:
            raise CurveError(
                CurveErrorKind.SHARES_EXCEED_TOTAL,
                index,
                f"total shares {running_total} exceed {total_target}",
            )

    normalized = [
        Curve(int(c.tick_lower), int(c.tick_upper), int(c.num_positions), int(c.shares))
        for c in curves
    ]
    if running_total == total_target:
        return normalized

    filler_lower = max(c.tick_upper for c in normalized)
    filler_upper = max_usable_tick(tick_spacing, max_tick)
    if filler_lower >= filler_upper:
        raise CurveError(
            CurveErrorKind.NON_MONOTONIC_TICKS,
            len(normalized),
            f"no room for a filler curve above tick {filler_lower}",
        )

    filler = Curve(
        tick_lower=filler_lower,
        tick_upper=filler_upper,
        num_positions=normalized[-1].num_positions,
        shares=total_target - running_total,
    )
    logger.debug(
        f"Appending filler curve [{filler.tick_lower}, {filler.tick_upper}] "
        f"with {filler.shares} shares"
    )
    return [*normalized, filler]
