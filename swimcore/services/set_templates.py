"""Set template catalog: warmup, pre-set, main-set and cooldown shapes.

Every builder has the signature ``(target, pace_seconds, rng)`` and returns a
tuple of set items. Builders never talk to each other; each one encodes a
single training shape (straight repeats, descends, ladders, broken swims and
so on) picked from small realistic distance catalogs, with repetition counts
snapped through ``nice_reps``.

Warmup and cooldown are continuous swimming only. Main sets and pre-sets run
on send-off intervals (broken swims use short fixed rest instead).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from swimcore.models import Equipment, SetGroup, SetItem, Stroke, WorkoutItem
from swimcore.services.budget import WARMUP_CAP
from swimcore.services.rng import SeededRandom
from swimcore.services.swim_math import calc_interval, nice_reps, round_half_up

SetBuilder = Callable[[int, int, SeededRandom], tuple[WorkoutItem, ...]]

LEAD_DISTANCE = 200
KANSAS_DISTANCE = 300
KANSAS_DESCRIPTION = "Kansas (50 free, 50 back, 100 breast, 50 back, 50 free)"
BROKEN_REST_SECONDS = 10
KICK_REPS_CAP = 12


def _moderate_free(distance: int) -> SetItem:
    return SetItem(1, distance, "Moderate free", Stroke.FREE)


# ── Warmup ──────────────────────────────────────────────────────────────

class WarmupFlavor(str, Enum):
    CHOICE = "choice"
    SKPS = "swim_kick_pull_swim"
    BUILD = "build"
    IM_ORDER = "im_order"
    KANSAS = "kansas"


def _warmup_choice(second: int) -> tuple[SetItem, ...]:
    return (_moderate_free(LEAD_DISTANCE), SetItem(1, second, "Moderate choice stroke", Stroke.CHOICE))


def _warmup_skps(second: int) -> tuple[SetItem, ...]:
    leg = round_half_up(second / 4, 50)
    if leg < 50:
        return _warmup_choice(second)
    return (
        _moderate_free(LEAD_DISTANCE),
        SetItem(1, leg, "Swim free", Stroke.FREE),
        SetItem(1, leg, "Kick", Stroke.FREE, Equipment.KICKBOARD),
        SetItem(1, leg, "Pull", Stroke.FREE, Equipment.PULL),
        SetItem(1, leg, "Swim free", Stroke.FREE),
    )


def _warmup_build(second: int) -> tuple[SetItem, ...]:
    reps = nice_reps(second / 100)
    distance = round_half_up(second / reps, 50) or 100
    return (_moderate_free(LEAD_DISTANCE), SetItem(reps, distance, "Build (moderate → fast)", Stroke.FREE))


def _warmup_im_order(second: int) -> tuple[SetItem, ...]:
    if second < 200:
        return _warmup_choice(second)
    rounds = max(1, round_half_up(second / 200, 1))
    return (
        _moderate_free(LEAD_DISTANCE),
        SetItem(rounds * 4, 50, "IM order (fly, back, breast, free)", Stroke.IM),
    )


def _warmup_kansas(second: int) -> tuple[SetItem, ...]:
    if second < KANSAS_DISTANCE:
        return _warmup_choice(second)
    max_reps = (WARMUP_CAP - LEAD_DISTANCE) // KANSAS_DISTANCE
    reps = min(max_reps, max(1, round_half_up(second / KANSAS_DISTANCE, 1)))
    return (_moderate_free(LEAD_DISTANCE), SetItem(reps, KANSAS_DISTANCE, KANSAS_DESCRIPTION, Stroke.MIXED))


WARMUP_FLAVORS: dict[WarmupFlavor, Callable[[int], tuple[SetItem, ...]]] = {
    WarmupFlavor.CHOICE: _warmup_choice,
    WarmupFlavor.SKPS: _warmup_skps,
    WarmupFlavor.BUILD: _warmup_build,
    WarmupFlavor.IM_ORDER: _warmup_im_order,
    WarmupFlavor.KANSAS: _warmup_kansas,
}


def build_warmup(target: int, pace: int, rng: SeededRandom) -> tuple[SetItem, ...]:
    """Lead with 200 moderate free, then optionally one flavored piece."""
    target = min(target, WARMUP_CAP)
    remaining = target - LEAD_DISTANCE
    if remaining < 200:
        return (_moderate_free(target),)
    second = round_half_up(remaining, 50)
    flavor = rng.pick(list(WARMUP_FLAVORS))
    return WARMUP_FLAVORS[flavor](second)


# ── Cooldown ────────────────────────────────────────────────────────────

class CooldownFlavor(str, Enum):
    BACK = "back"
    CHOICE = "choice"
    KANSAS = "kansas"


def _cooldown_back(first: int) -> tuple[SetItem, ...]:
    return (SetItem(1, first, "Moderate backstroke", Stroke.BACK), _moderate_free(LEAD_DISTANCE))


def _cooldown_choice(first: int) -> tuple[SetItem, ...]:
    return (SetItem(1, first, "Moderate choice — loosen up", Stroke.CHOICE), _moderate_free(LEAD_DISTANCE))


def _cooldown_kansas(first: int) -> tuple[SetItem, ...]:
    if first < KANSAS_DISTANCE:
        return _cooldown_back(first)
    reps = max(1, round_half_up(first / KANSAS_DISTANCE, 1))
    return (SetItem(reps, KANSAS_DISTANCE, KANSAS_DESCRIPTION, Stroke.MIXED), _moderate_free(LEAD_DISTANCE))


COOLDOWN_FLAVORS: dict[CooldownFlavor, Callable[[int], tuple[SetItem, ...]]] = {
    CooldownFlavor.BACK: _cooldown_back,
    CooldownFlavor.CHOICE: _cooldown_choice,
    CooldownFlavor.KANSAS: _cooldown_kansas,
}


def build_cooldown(target: int, pace: int, rng: SeededRandom) -> tuple[SetItem, ...]:
    """Optionally one loosening piece, always finishing on 200 moderate free."""
    remaining = target - LEAD_DISTANCE
    if remaining < 200:
        return (_moderate_free(target),)
    first = round_half_up(remaining, 50)
    flavor = rng.pick(list(COOLDOWN_FLAVORS))
    return COOLDOWN_FLAVORS[flavor](first)


# ── Main sets ───────────────────────────────────────────────────────────

DESCEND_COMBOS = (
    (3, 3), (4, 4), (6, 3), (8, 4), (12, 3),
    (12, 4), (15, 3), (16, 4), (20, 4),
)

LADDER_PATTERNS = (
    (100, 200, 300, 400),
    (100, 200, 300, 400, 500),
    (200, 300, 400, 500),
    (100, 200, 300, 200, 100),
)

COMBO_PATTERNS = (
    ((400, 0.30), (200, 0.35), (100, 0.35)),
    ((400, 0.25), (200, 0.30), (100, 0.25), (50, 0.20)),
    ((300, 0.30), (200, 0.40), (100, 0.30)),
    ((500, 0.35), (200, 0.30), (100, 0.35)),
)

COMBO_DESCRIPTIONS = (
    "Free — settle into pace",
    "Free — hold steady",
    "Free — pick it up",
    "Free — fast finish",
)


def main_straight(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((100, 200, 200, 300, 400))
    reps = nice_reps(target / distance)
    cue = rng.pick(("Hold pace", "Steady effort", "Strong & consistent"))
    return (SetItem(reps, distance, f"Free — {cue}", Stroke.FREE, interval=calc_interval(distance, pace, 10)),)


def main_descend(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    """Repeats descended in groups of 3 or 4, reps chosen from combos that divide evenly."""
    distance = rng.pick((100, 150, 200))
    raw_reps = round_half_up(target / distance, 1)
    reps, group = min(DESCEND_COMBOS, key=lambda combo: abs(combo[0] - raw_reps))
    rounds = reps // group
    description = f"Free — Descend 1-{group}"
    if rounds > 1:
        description += f", {rounds}x through"
    return (SetItem(reps, distance, description, Stroke.FREE, interval=calc_interval(distance, pace, 12)),)


def _ladder_description(index: int, count: int) -> str:
    if index == 0:
        return "Free — ease into it"
    if index == count - 1:
        return "Free — strong finish"
    return "Free — settle in"


def main_ladder(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    """Repeat a base ladder until it reaches 70% of target, then trim back under 115%."""
    pattern = rng.pick(LADDER_PATTERNS)
    steps = list(pattern)
    while sum(steps) < target * 0.7:
        steps.extend(pattern)
    while sum(steps) > target * 1.15 and len(steps) > 3:
        steps.pop()
    return tuple(
        SetItem(1, d, _ladder_description(i, len(steps)), Stroke.FREE, interval=calc_interval(d, pace, 10))
        for i, d in enumerate(steps)
    )


def main_pyramid(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    """Up-and-down pyramid; a holding set fills in when the pyramid alone is short."""
    step = 100 if target >= 2000 else 50
    # A pyramid peaking at k steps covers step * k^2.
    peak_steps = int(math.sqrt(target * 1.15 / step))
    peak_steps = max(2, min(peak_steps, 500 // step))
    ascending = [step * k for k in range(1, peak_steps + 1)]
    pyramid = ascending + ascending[-2::-1]
    half = len(pyramid) / 2
    items: list[WorkoutItem] = [
        SetItem(
            1, d,
            "Free — build up" if i < half else "Free — bring it home",
            Stroke.FREE,
            interval=calc_interval(d, pace, 10),
        )
        for i, d in enumerate(pyramid)
    ]
    covered = sum(pyramid)
    if covered < target * 0.7:
        distance = rng.pick((100, 200))
        reps = nice_reps((target - covered) / distance)
        items.append(SetItem(reps, distance, "Free — hold best pace", Stroke.FREE, interval=calc_interval(distance, pace, 10)))
    return tuple(items)


def main_negative_split(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((200, 200, 300, 400))
    reps = nice_reps(target / distance)
    return (SetItem(reps, distance, "Free — negative split each", Stroke.FREE, interval=calc_interval(distance, pace, 12)),)


def main_pull(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((200, 200, 300, 400))
    reps = nice_reps(target / distance)
    cue = rng.pick(("Descend 1-4", "Negative split each", "Build within each", "Hold strong pace"))
    return (
        SetItem(reps, distance, f"Pull — {cue}", Stroke.FREE, Equipment.PULL, interval=calc_interval(distance, pace, 10)),
    )


def main_mixed_gear(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    """Swim / pull / kick rounds as one group repeated N times."""
    swim = rng.pick((200, 300))
    pull = rng.pick((200, 300))
    kick = rng.pick((100, 200))
    rounds = nice_reps(target / (swim + pull + kick))
    children = (
        SetItem(1, swim, "Swim free — strong", Stroke.FREE, interval=calc_interval(swim, pace, 10)),
        SetItem(1, pull, "Pull free", Stroke.FREE, Equipment.PULL, interval=calc_interval(pull, pace, 10)),
        SetItem(1, kick, "Kick choice", Stroke.CHOICE, Equipment.KICKBOARD, interval=calc_interval(kick, pace, 20)),
    )
    return (SetGroup(rounds, f"{rounds}x through:", children),)


def _im_repeats(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((100, 200)) if target >= 1500 else 100
    reps = nice_reps(target / distance)
    return (SetItem(reps, distance, "IM", Stroke.IM, interval=calc_interval(distance, pace, 15)),)


def _im_stroke_quartet(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((50, 100)) if target >= 1200 else 50
    reps = nice_reps(target / (distance * 4))
    interval = calc_interval(distance, pace, 15)
    return (
        SetItem(reps, distance, "Fly", Stroke.FLY, interval=interval),
        SetItem(reps, distance, "Back", Stroke.BACK, interval=interval),
        SetItem(reps, distance, "Breast", Stroke.BREAST, interval=interval),
        SetItem(reps, distance, "Free — fast", Stroke.FREE, interval=interval),
    )


def _im_and_free(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    im_distance = rng.pick((100, 200))
    im_reps = nice_reps(target * 0.5 / im_distance)
    free_distance = rng.pick((100, 200))
    free_reps = nice_reps(target * 0.5 / free_distance)
    return (
        SetItem(im_reps, im_distance, "IM", Stroke.IM, interval=calc_interval(im_distance, pace, 15)),
        SetItem(free_reps, free_distance, "Free — pick it up", Stroke.FREE, interval=calc_interval(free_distance, pace, 10)),
    )


IM_FORMATS: tuple[SetBuilder, ...] = (_im_repeats, _im_stroke_quartet, _im_and_free)


def main_im(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    return rng.pick(IM_FORMATS)(target, pace, rng)


def main_broken(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    """A race distance broken into short pieces with 10s rest, then aerobic repeats."""
    race = rng.pick((400, 500, 800)) if target >= 1500 else rng.pick((400, 500))
    piece = rng.pick((100, 50))
    items: list[WorkoutItem] = [
        SetItem(
            race // piece, piece,
            f"Broken {race} free — race pace",
            Stroke.FREE,
            rest_seconds=BROKEN_REST_SECONDS,
        )
    ]
    remaining = target - race
    if remaining >= 200:
        distance = rng.pick((100, 200))
        reps = nice_reps(remaining / distance)
        items.append(SetItem(reps, distance, "Free — moderate", Stroke.FREE, interval=calc_interval(distance, pace, 10)))
    return tuple(items)


def main_combo(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    pattern = rng.pick(COMBO_PATTERNS)
    items = []
    for i, (distance, share) in enumerate(pattern):
        reps = nice_reps(target * share / distance)
        description = COMBO_DESCRIPTIONS[min(i, len(COMBO_DESCRIPTIONS) - 1)]
        items.append(SetItem(reps, distance, description, Stroke.FREE, interval=calc_interval(distance, pace, 10)))
    return tuple(items)


def main_fins(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    swim = rng.pick((200, 300))
    fins = rng.pick((100, 200))
    swim_reps = nice_reps(target * 0.6 / swim)
    fins_reps = nice_reps(target * 0.4 / fins)
    return (
        SetItem(swim_reps, swim, "Free — strong pace", Stroke.FREE, interval=calc_interval(swim, pace, 10)),
        SetItem(fins_reps, fins, "Free with fins — fast!", Stroke.FREE, Equipment.FINS, interval=calc_interval(fins, pace, 5)),
    )


class MainSetTemplate(str, Enum):
    STRAIGHT = "straight"
    DESCEND = "descend"
    LADDER = "ladder"
    PYRAMID = "pyramid"
    NEGATIVE_SPLIT = "negative_split"
    PULL = "pull"
    MIXED_GEAR = "mixed_gear"
    IM = "im"
    BROKEN = "broken"
    COMBO = "combo"
    FINS = "fins"


@dataclass(frozen=True)
class TemplateEntry:
    build: SetBuilder
    weight: int
    name: str


MAIN_SET_TEMPLATES: dict[MainSetTemplate, TemplateEntry] = {
    MainSetTemplate.STRAIGHT: TemplateEntry(main_straight, 4, "Straight Freestyle"),
    MainSetTemplate.DESCEND: TemplateEntry(main_descend, 4, "Descend Set"),
    MainSetTemplate.LADDER: TemplateEntry(main_ladder, 3, "Ladder"),
    MainSetTemplate.PYRAMID: TemplateEntry(main_pyramid, 2, "Pyramid"),
    MainSetTemplate.NEGATIVE_SPLIT: TemplateEntry(main_negative_split, 3, "Negative Split"),
    MainSetTemplate.PULL: TemplateEntry(main_pull, 3, "Pull Set"),
    MainSetTemplate.MIXED_GEAR: TemplateEntry(main_mixed_gear, 2, "Mixed Gear"),
    MainSetTemplate.IM: TemplateEntry(main_im, 2, "IM Set"),
    MainSetTemplate.BROKEN: TemplateEntry(main_broken, 2, "Broken Swim"),
    MainSetTemplate.COMBO: TemplateEntry(main_combo, 3, "Distance Combo"),
    MainSetTemplate.FINS: TemplateEntry(main_fins, 2, "Fins Set"),
}


def pick_main_template(rng: SeededRandom) -> MainSetTemplate:
    templates = list(MAIN_SET_TEMPLATES)
    return rng.weighted_pick(templates, [MAIN_SET_TEMPLATES[t].weight for t in templates])


# ── Pre-sets ────────────────────────────────────────────────────────────

def preset_kick(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((50, 100))
    reps = min(nice_reps(target / distance), KICK_REPS_CAP)
    description = rng.pick(("Kick — moderate", "Kick — build each", "Kick — descend 1-4"))
    return (
        SetItem(reps, distance, description, Stroke.FREE, Equipment.KICKBOARD, interval=calc_interval(distance, pace, 25)),
    )


def preset_pull(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    distance = rng.pick((100, 200))
    reps = nice_reps(target / distance)
    description = rng.pick(("Pull — steady", "Pull — build", "Pull — negative split each"))
    return (
        SetItem(reps, distance, description, Stroke.FREE, Equipment.PULL, interval=calc_interval(distance, pace, 10)),
    )


def preset_drill(target: int, pace: int, rng: SeededRandom) -> tuple[WorkoutItem, ...]:
    drill = rng.pick((
        "Catch-up drill / swim by 25",
        "Fingertip drag / swim by 25",
        "Fist drill / swim by 25",
    ))
    reps = nice_reps(target / 50)
    return (SetItem(reps, 50, drill, Stroke.FREE, interval=calc_interval(50, pace, 15)),)


class PresetTemplate(str, Enum):
    KICK = "kick"
    PULL = "pull"
    DRILL = "drill"


PRESET_TEMPLATES: dict[PresetTemplate, SetBuilder] = {
    PresetTemplate.KICK: preset_kick,
    PresetTemplate.PULL: preset_pull,
    PresetTemplate.DRILL: preset_drill,
}


def pick_preset_template(rng: SeededRandom) -> PresetTemplate:
    return rng.pick(list(PRESET_TEMPLATES))
