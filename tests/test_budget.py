"""Tests for the distance budget allocator."""

from __future__ import annotations

import pytest

from swimcore.services.budget import (
    WARMUP_CAP,
    allocate_main_and_preset,
    allocate_warmup_cooldown,
    estimate_minutes,
    target_distance,
    utilization_for,
)
from swimcore.services.rng import SeededRandom


class _FixedDraw(SeededRandom):
    def __init__(self, value: float):
        super().__init__(0)
        self._value = value

    def next(self) -> float:
        return self._value


@pytest.mark.parametrize(
    "duration,expected",
    [(20, 0.72), (30, 0.72), (45, 0.68), (60, 0.68), (61, 0.65), (90, 0.65), (120, 0.65)],
)
def test_utilization_step_function(duration, expected):
    assert utilization_for(duration) == expected


def test_target_distance_rounds_to_100():
    assert target_distance(60, 90) == 2700
    assert target_distance(30, 105) == 1200
    assert target_distance(90, 90) == 3900
    assert target_distance(120, 90) == 5200


def test_target_distance_odd_durations_do_not_fail():
    assert target_distance(45, 90) % 100 == 0
    assert target_distance(1, 90) >= 0


def test_main_and_preset_split():
    budget = allocate_main_and_preset(2700, 60, _FixedDraw(0.5))
    assert budget.main == 1700
    assert budget.include_preset is True
    assert budget.preset == 300


def test_preset_skipped_when_chance_fails():
    budget = allocate_main_and_preset(2700, 60, _FixedDraw(0.6))
    assert budget.include_preset is False
    assert budget.preset == 0
    assert budget.main == 1700


def test_short_sessions_rarely_get_preset():
    assert allocate_main_and_preset(1200, 30, _FixedDraw(0.19)).include_preset is True
    assert allocate_main_and_preset(1200, 30, _FixedDraw(0.25)).include_preset is False


def test_padding_uses_actual_main_distance():
    padding = allocate_warmup_cooldown(2700, 1600, 300)
    assert padding.remainder == 800
    assert padding.cooldown == 250
    assert padding.warmup == 550


def test_padding_floors_at_200():
    padding = allocate_warmup_cooldown(2700, 2200, 300)
    assert padding.cooldown == 200
    assert padding.warmup == 200


def test_padding_floors_when_main_overshoots_total():
    padding = allocate_warmup_cooldown(1200, 1400, 0)
    assert padding.remainder == -200
    assert padding.cooldown == 200
    assert padding.warmup == 200


def test_warmup_cap_is_applied_after_rounding():
    padding = allocate_warmup_cooldown(5900, 2000, 0)
    assert padding.cooldown == 1150
    assert padding.warmup == WARMUP_CAP


def test_estimate_minutes_matches_budget_when_clock_agrees():
    assert estimate_minutes(2700, 90, 60, 3573) == 60
    assert estimate_minutes(1200, 105, 30, 1750) == 29


def test_estimate_minutes_moves_with_set_clock():
    assert estimate_minutes(2700, 90, 60, 2400) == 55
    assert estimate_minutes(2700, 90, 60, 4800) == 65
