"""Distance budget: how far to swim in the time available and how to split it.

The main set is sized first from a fixed share of the total. Warmup and
cooldown are then back-filled from whatever the generated main set and
pre-set actually left over, since nice rep counts and distance catalogs
rarely land exactly on the nominal allocation.
"""

from __future__ import annotations

from dataclasses import dataclass

from swimcore.services.rng import SeededRandom
from swimcore.services.swim_math import round_half_up

MAIN_SHARE = 0.62
PRESET_SHARE = 0.10
PRESET_CHANCE_LONG = 0.55
PRESET_CHANCE_SHORT = 0.20
COOLDOWN_SHARE = 0.30
MIN_PADDING = 200
WARMUP_CAP = 1000
SET_CLOCK_WEIGHT = 0.25


@dataclass(frozen=True)
class MainPresetBudget:
    main: int
    include_preset: bool
    preset: int


@dataclass(frozen=True)
class PaddingBudget:
    remainder: int
    warmup: int
    cooldown: int


def utilization_for(duration_min: float) -> float:
    """Fraction of the session spent swimming; longer sessions carry more rest."""
    if duration_min <= 30:
        return 0.72
    if duration_min <= 60:
        return 0.68
    return 0.65


def target_distance(duration_min: float, pace_seconds: float) -> int:
    swim_seconds = duration_min * 60 * utilization_for(duration_min)
    return round_half_up(swim_seconds / (pace_seconds / 100), 100)


def allocate_main_and_preset(total: int, duration_min: float, rng: SeededRandom) -> MainPresetBudget:
    main = round_half_up(total * MAIN_SHARE, 100)
    include_preset = rng.chance(PRESET_CHANCE_LONG if duration_min > 30 else PRESET_CHANCE_SHORT)
    preset = round_half_up(total * PRESET_SHARE, 100) if include_preset else 0
    return MainPresetBudget(main=main, include_preset=include_preset, preset=preset)


def allocate_warmup_cooldown(total: int, actual_main: int, actual_preset: int) -> PaddingBudget:
    """Split the distance left after the main set and pre-set.

    Both sides get at least ``MIN_PADDING``. The warmup cap is applied after
    rounding so it holds as a hard limit.
    """
    remainder = total - actual_main - actual_preset
    cooldown = max(MIN_PADDING, round_half_up(remainder * COOLDOWN_SHARE, 50))
    warmup = max(MIN_PADDING, remainder - cooldown)
    warmup = min(WARMUP_CAP, round_half_up(warmup, 50))
    return PaddingBudget(remainder=remainder, warmup=warmup, cooldown=cooldown)


def estimate_minutes(distance: int, pace_seconds: float, duration_min: float, set_clock_seconds: float) -> int:
    """Wall-clock estimate blending the budgeted swim/rest split with the set clock.

    The budget side is swim time at pace over the utilization fraction. The set
    clock is what the prescribed send-offs and continuous swims add up to. It
    leaves out transitions between sets, so it carries only part of the weight.
    """
    budgeted = distance / 100 * pace_seconds / utilization_for(duration_min)
    blended = (1 - SET_CLOCK_WEIGHT) * budgeted + SET_CLOCK_WEIGHT * set_clock_seconds
    return int(round_half_up(blended / 60, 1))
