"""Workout composer: turns (duration, pace, unit) into a full swim workout.

Steps run strictly in order with no retries:

1. seed the random source and parse the request
2. size the main set and decide on a pre-set
3. generate the main set (and pre-set)
4. back-fill warmup and cooldown budgets from the actual distance left
5. generate warmup and cooldown
6. aggregate actual totals into the ``Workout`` record

Any parse failure stops the pipeline before generation starts, and a
generator that returns nothing usable is treated as a defect.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from swimcore.errors import InvalidWorkoutRequest, WorkoutCompositionError
from swimcore.models import COOLDOWN, MAIN_SET, PRE_SET, WARMUP, Unit, Workout, WorkoutItem, WorkoutSection
from swimcore.services.budget import (
    allocate_main_and_preset,
    allocate_warmup_cooldown,
    estimate_minutes,
    target_distance,
)
from swimcore.services.rng import SeededRandom
from swimcore.services.set_templates import (
    MAIN_SET_TEMPLATES,
    PRESET_TEMPLATES,
    build_cooldown,
    build_warmup,
    pick_main_template,
    pick_preset_template,
)
from swimcore.services.swim_math import parse_pace, total_distance, total_duration

logger = logging.getLogger(__name__)

# Effort multipliers on the base pace when estimating set clock time.
SECTION_PACE_FACTORS = {WARMUP: 1.15, PRE_SET: 1.1, MAIN_SET: 1.0, COOLDOWN: 1.2}


def _parse_unit(unit: str | Unit) -> Unit:
    try:
        return Unit(unit)
    except ValueError:
        allowed = ", ".join(u.value for u in Unit)
        raise InvalidWorkoutRequest(f"unit must be one of {allowed}, got {unit!r}") from None


def _section(name: str, items: Sequence[WorkoutItem]) -> WorkoutSection:
    items = tuple(items)
    if not items:
        raise WorkoutCompositionError(f"{name} generator returned no items")
    distance = total_distance(items)
    if distance <= 0:
        raise WorkoutCompositionError(f"{name} generator returned a non-positive distance ({distance})")
    return WorkoutSection(name=name, items=items, distance=distance)


def generate_workout(
    duration: int,
    pace: str,
    unit: str | Unit = Unit.YARDS,
    seed: Optional[int] = None,
) -> Workout:
    """Compose a complete workout; the same seed always yields the same workout."""
    if seed is None:
        seed = SeededRandom.draw_seed()
    if duration is None or duration <= 0:
        raise InvalidWorkoutRequest(f"duration must be a positive number of minutes, got {duration!r}")
    pace_seconds = parse_pace(pace)
    unit = _parse_unit(unit)
    rng = SeededRandom(seed)

    total = target_distance(duration, pace_seconds)
    budget = allocate_main_and_preset(total, duration, rng)
    logger.debug(
        "workout_budget_allocated",
        extra={
            "ctx_seed": seed,
            "ctx_total_target": total,
            "ctx_main_target": budget.main,
            "ctx_preset_target": budget.preset,
        },
    )

    template = pick_main_template(rng)
    entry = MAIN_SET_TEMPLATES[template]
    main_set = _section(MAIN_SET, entry.build(budget.main, pace_seconds, rng))

    preset: Optional[WorkoutSection] = None
    if budget.include_preset:
        preset_template = pick_preset_template(rng)
        preset = _section(PRE_SET, PRESET_TEMPLATES[preset_template](budget.preset, pace_seconds, rng))

    padding = allocate_warmup_cooldown(total, main_set.distance, preset.distance if preset else 0)
    warmup = _section(WARMUP, build_warmup(padding.warmup, pace_seconds, rng))
    cooldown = _section(COOLDOWN, build_cooldown(padding.cooldown, pace_seconds, rng))

    sections = tuple(s for s in (warmup, preset, main_set, cooldown) if s is not None)
    distance = sum(s.distance for s in sections)
    set_clock = sum(total_duration(s.items, pace_seconds * SECTION_PACE_FACTORS[s.name]) for s in sections)
    workout = Workout(
        name=entry.name,
        duration=duration,
        pace=pace,
        unit=unit,
        total_distance=distance,
        estimated_minutes=estimate_minutes(distance, pace_seconds, duration, set_clock),
        sections=sections,
        seed=seed,
    )
    logger.info(
        "workout_generated",
        extra={
            "ctx_seed": seed,
            "ctx_template": template.value,
            "ctx_total_target": total,
            "ctx_total_distance": distance,
            "ctx_estimated_minutes": workout.estimated_minutes,
            "ctx_set_clock_minutes": round(set_clock / 60, 1),
        },
    )
    return workout
