"""End-to-end properties of generated workouts."""

from __future__ import annotations

import json

import pytest

import swimcore.services.workout_composer as composer
from swimcore.errors import InvalidWorkoutRequest, WorkoutCompositionError
from swimcore.models import COOLDOWN, MAIN_SET, PRE_SET, SECTION_ORDER, WARMUP, SetGroup, Timing, Unit
from swimcore.services.budget import estimate_minutes
from swimcore.services.formatter import workout_to_dict
from swimcore.services.rng import MAX_SEED
from swimcore.services.set_templates import MAIN_SET_TEMPLATES, MainSetTemplate, TemplateEntry
from swimcore.services.swim_math import NICE_REPS, total_distance, total_duration
from swimcore.services.workout_composer import generate_workout

DURATIONS = (30, 60, 90, 120)
PACES = ("1:10", "1:30", "1:45", "2:10")


def _grid():
    for duration in DURATIONS:
        for pace in PACES:
            for seed in range(12):
                yield generate_workout(duration, pace, "yards", seed=seed)


def _leaves(items):
    for item in items:
        if isinstance(item, SetGroup):
            yield from item.children
        else:
            yield item


# --- determinism ---

def test_same_seed_is_byte_identical():
    a = workout_to_dict(generate_workout(60, "1:30", "yards", seed=42))
    b = workout_to_dict(generate_workout(60, "1:30", "yards", seed=42))
    assert json.dumps(a, sort_keys=True) == json.dumps(b, sort_keys=True)


def test_other_seed_changes_workout():
    a = workout_to_dict(generate_workout(60, "1:30", "yards", seed=42))
    b = workout_to_dict(generate_workout(60, "1:30", "yards", seed=43))
    a.pop("seed")
    b.pop("seed")
    assert a != b


def test_seed_is_drawn_and_reported_when_missing():
    workout = generate_workout(60, "1:30", "meters")
    assert 0 <= workout.seed < MAX_SEED
    assert generate_workout(60, "1:30", "meters", seed=workout.seed) == workout


# --- concrete scenario ---

def test_sixty_minutes_at_1_30_seed_42():
    workout = generate_workout(60, "1:30", "yards", seed=42)
    assert workout.seed == 42
    assert workout.duration == 60
    assert workout.pace == "1:30"
    assert workout.unit is Unit.YARDS
    assert workout.section(MAIN_SET) is not None
    assert workout.name in {entry.name for entry in MAIN_SET_TEMPLATES.values()}
    assert abs(workout.estimated_minutes - 60) <= 6


def test_estimate_includes_set_clock():
    for duration in DURATIONS:
        for seed in range(6):
            workout = generate_workout(duration, "1:30", "yards", seed=seed)
            clock = sum(
                total_duration(s.items, 90 * composer.SECTION_PACE_FACTORS[s.name]) for s in workout.sections
            )
            assert workout.estimated_minutes == estimate_minutes(workout.total_distance, 90, duration, clock)


def test_thirty_minutes_slow_pace_still_has_content():
    for seed in range(40):
        workout = generate_workout(30, "1:45", "yards", seed=seed)
        warmup = workout.section(WARMUP)
        main = workout.section(MAIN_SET)
        assert warmup is not None and warmup.items and warmup.distance >= 200
        assert main is not None and main.items and main.distance > 0


# --- properties over a grid of requests ---

def test_aggregation_matches_recursive_sum():
    for workout in _grid():
        for section in workout.sections:
            assert section.distance == total_distance(section.items)
        assert workout.total_distance == sum(s.distance for s in workout.sections)


def test_timing_values_are_multiples_of_5():
    for workout in _grid():
        for section in workout.sections:
            for leaf in _leaves(section.items):
                if leaf.interval is not None:
                    assert leaf.interval % 5 == 0
                if leaf.rest_seconds is not None:
                    assert leaf.rest_seconds % 5 == 0


def test_repeated_main_and_preset_items_use_nice_reps():
    for workout in _grid():
        for name in (MAIN_SET, PRE_SET):
            section = workout.section(name)
            if section is None:
                continue
            for item in section.items:
                if isinstance(item, SetGroup):
                    assert item.repetitions in NICE_REPS
            for leaf in _leaves(section.items):
                if leaf.repetitions > 1:
                    assert leaf.repetitions in NICE_REPS
                if name == PRE_SET and "Kick" in leaf.description:
                    assert leaf.repetitions <= 12


def test_section_bounds():
    for workout in _grid():
        warmup = workout.section(WARMUP)
        cooldown = workout.section(COOLDOWN)
        assert 200 <= warmup.distance <= 1000
        assert cooldown.distance >= 200


def test_warmup_and_cooldown_are_continuous():
    for workout in _grid():
        for name in (WARMUP, COOLDOWN):
            for leaf in _leaves(workout.section(name).items):
                assert leaf.timing is Timing.CONTINUOUS
                assert leaf.interval is None and leaf.rest_seconds is None


def test_sections_ordered_and_non_empty():
    for workout in _grid():
        names = [s.name for s in workout.sections]
        assert names == [n for n in SECTION_ORDER if n in names]
        assert {WARMUP, MAIN_SET, COOLDOWN} <= set(names)
        assert all(s.items for s in workout.sections)


def test_preset_appears_for_some_seeds_only():
    has_preset = {generate_workout(60, "1:30", "yards", seed=s).section(PRE_SET) is not None for s in range(40)}
    assert has_preset == {True, False}


def test_odd_durations_do_not_fail():
    for duration in (1, 5, 45, 75, 180):
        workout = generate_workout(duration, "1:30", "meters", seed=3)
        assert workout.total_distance > 0
        assert workout.section(MAIN_SET) is not None


# --- errors ---

@pytest.mark.parametrize(
    "duration,pace,unit",
    [(60, "fast", "yards"), (60, "1-30", "yards"), (0, "1:30", "yards"), (-30, "1:30", "yards"), (60, "1:30", "furlongs")],
)
def test_invalid_input_rejected(duration, pace, unit):
    with pytest.raises(InvalidWorkoutRequest):
        generate_workout(duration, pace, unit, seed=1)


def test_invalid_input_fails_before_generation(monkeypatch):
    def _boom(rng):
        raise AssertionError("generation should not start")

    monkeypatch.setattr(composer, "pick_main_template", _boom)
    with pytest.raises(InvalidWorkoutRequest):
        generate_workout(60, "x:yz", "yards", seed=1)


def test_empty_generator_output_is_a_defect(monkeypatch):
    monkeypatch.setattr(composer, "pick_main_template", lambda rng: MainSetTemplate.STRAIGHT)
    monkeypatch.setitem(MAIN_SET_TEMPLATES, MainSetTemplate.STRAIGHT, TemplateEntry(lambda t, p, r: (), 4, "Broken"))
    with pytest.raises(WorkoutCompositionError):
        generate_workout(60, "1:30", "yards", seed=1)
