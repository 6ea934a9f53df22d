"""Epoch schedule math for dynamic (Dutch-style) auctions.

The auction hook moves its price tick by ``gamma`` each epoch until the end
tick is reached, so ``gamma`` must be large enough to cover the whole range in
the available number of epochs and must stay aligned to the pool's tick spacing.
"""

from __future__ import annotations

from dataclasses import dataclass

from doppler_paths.core.errors import InvalidSchedule
from doppler_paths.core.utils.tick_math import (
    price_to_tick,
    round_tick_down,
    round_tick_up,
)

MAX_INT24 = 2**23 - 1


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def compute_gamma(
    start_tick: int,
    end_tick: int,
    duration_seconds: int,
    epoch_length_seconds: int,
    tick_spacing: int,
) -> int:
    """Smallest tick-spacing-aligned per-epoch move covering the tick range.

    ``ceil(|end - start| / (duration / epoch_length))``, rounded up to a
    multiple of ``tick_spacing`` and never less than one spacing unit. The
    epoch count is kept as an exact ratio, so a duration that is not a multiple
    of the epoch length is accepted here (see :func:`validate_schedule`).
    """
    if duration_seconds <= 0:
        raise InvalidSchedule("Auction duration must be positive")
    if epoch_length_seconds <= 0:
        raise InvalidSchedule("Epoch length must be positive")
    if tick_spacing <= 0:
        raise InvalidSchedule("Tick spacing must be positive")

    tick_delta = abs(end_tick - start_tick)
    per_epoch = _ceil_div(tick_delta * epoch_length_seconds, duration_seconds)
    gamma = max(tick_spacing, round_tick_up(per_epoch, tick_spacing))

    if gamma % tick_spacing != 0:
        raise InvalidSchedule("Computed gamma must be divisible by tick spacing")
    return gamma


@dataclass(frozen=True)
class AuctionSchedule:
    start_tick: int
    end_tick: int
    duration_seconds: int
    epoch_length_seconds: int
    tick_spacing: int
    gamma: int

    @property
    def total_epochs(self) -> int:
        return self.duration_seconds // self.epoch_length_seconds

    @property
    def direction(self) -> int:
        return 1 if self.end_tick >= self.start_tick else -1

    def tick_at_epoch(self, epochs_elapsed: int) -> int:
        """Target tick after ``epochs_elapsed`` epochs, capped at the end tick."""
        if epochs_elapsed < 0:
            raise ValueError("epochs_elapsed cannot be negative")
        tick = self.start_tick + self.direction * epochs_elapsed * self.gamma
        if self.direction > 0:
            return min(tick, self.end_tick)
        return max(tick, self.end_tick)

    def current_epoch(self, starting_time: int, now: int) -> int:
        if now < starting_time:
            return 0
        elapsed = (now - starting_time) // self.epoch_length_seconds
        return min(elapsed, self.total_epochs)


def validate_schedule(schedule: AuctionSchedule) -> AuctionSchedule:
    if schedule.duration_seconds <= 0:
        raise InvalidSchedule("Auction duration must be positive")
    if schedule.epoch_length_seconds <= 0:
        raise InvalidSchedule("Epoch length must be positive")
    if schedule.tick_spacing <= 0:
        raise InvalidSchedule("Tick spacing must be positive")
    if schedule.duration_seconds % schedule.epoch_length_seconds != 0:
        raise InvalidSchedule("Epoch length must divide total duration evenly")
    if schedule.gamma % schedule.tick_spacing != 0:
        raise InvalidSchedule("Gamma must be divisible by tick spacing")
    if schedule.gamma < schedule.tick_spacing:
        raise InvalidSchedule("Gamma must be at least one tick spacing")
    if schedule.gamma > MAX_INT24:
        raise InvalidSchedule("Gamma does not fit in int24")
    return schedule


def build_schedule(
    *,
    start_tick: int,
    end_tick: int,
    duration_seconds: int,
    epoch_length_seconds: int,
    tick_spacing: int,
    gamma: int | None = None,
) -> AuctionSchedule:
    if gamma is None:
        gamma = compute_gamma(
            start_tick, end_tick, duration_seconds, epoch_length_seconds, tick_spacing
        )
    return validate_schedule(
        AuctionSchedule(
            start_tick=int(start_tick),
            end_tick=int(end_tick),
            duration_seconds=int(duration_seconds),
            epoch_length_seconds=int(epoch_length_seconds),
            tick_spacing=int(tick_spacing),
            gamma=int(gamma),
        )
    )


def ticks_from_price_range(
    start_price: float, end_price: float, tick_spacing: int
) -> tuple[int, int]:
    """Map a price range to spacing-aligned ticks (start floored, end ceiled)."""
    if start_price <= 0 or end_price <= 0:
        raise ValueError("Prices must be positive")
    if start_price == end_price:
        raise ValueError("Start and end prices must be different")
    if tick_spacing <= 0:
        raise ValueError("Tick spacing must be positive")

    start_tick = round_tick_down(price_to_tick(start_price), tick_spacing)
    end_tick = round_tick_up(price_to_tick(end_price, round_up=True), tick_spacing)
    if start_tick == end_tick:
        raise ValueError("Start and end prices must result in different ticks")
    return start_tick, end_tick
