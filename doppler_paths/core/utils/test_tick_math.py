from __future__ import annotations

import pytest

from doppler_paths.core.utils.tick_math import (
    MAX_TICK,
    MIN_TICK,
    check_tick,
    max_usable_tick,
    price_to_tick,
    round_tick_down,
    round_tick_up,
)


def test_price_to_tick_rounding():
    assert price_to_tick(1.0) == 0
    assert price_to_tick(0.0001) == -92109
    assert price_to_tick(0.0001, round_up=True) == -92108
    assert price_to_tick(1000.0) == 69081
    assert price_to_tick(1000.0, round_up=True) == 69082


def test_price_to_tick_rejects_non_positive():
    with pytest.raises(ValueError):
        price_to_tick(0)


def test_round_tick_down():
    assert round_tick_down(23, 10) == 20
    assert round_tick_down(-5, 10) == -10
    assert round_tick_down(-10, 10) == -10


def test_round_tick_up():
    assert round_tick_up(23, 10) == 30
    assert round_tick_up(20, 10) == 20
    assert round_tick_up(-5, 10) == 0
    assert round_tick_up(-13, 10) == -10


def test_max_usable_tick():
    assert max_usable_tick(60) == 887220
    assert max_usable_tick(1) == MAX_TICK
    assert max_usable_tick(200) % 200 == 0
    with pytest.raises(ValueError):
        max_usable_tick(0)


def test_check_tick():
    assert check_tick(MIN_TICK) == MIN_TICK
    with pytest.raises(ValueError, match="Tick out of bounds"):
        check_tick(MAX_TICK + 1)
