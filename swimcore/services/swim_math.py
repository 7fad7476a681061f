"""Pace, interval and distance arithmetic for swim sets.

Paces are seconds per 100 units (meters or yards, the maths is the same).
Aggregation walks the set tree: a ``SetGroup`` multiplies the sum of its
children by its own repetitions.
"""

from __future__ import annotations

import math
import re
from typing import Iterable

from swimcore.errors import InvalidWorkoutRequest
from swimcore.models import SetGroup, SetItem, Timing, WorkoutItem

NICE_REPS = (2, 3, 4, 5, 6, 8, 10, 12, 15, 16, 20)

_PACE_RE = re.compile(r"^\s*(\d+):(\d+)\s*$")


def parse_pace(pace: str) -> int:
    """Convert a 'M:SS' pace string into total seconds per 100."""
    match = _PACE_RE.match(pace or "")
    if not match:
        raise InvalidWorkoutRequest(f"pace must look like M:SS, got {pace!r}")
    seconds = int(match.group(1)) * 60 + int(match.group(2))
    if seconds <= 0:
        raise InvalidWorkoutRequest("pace must be longer than 0:00")
    return seconds


def format_time(seconds: float) -> str:
    """Format seconds as 'M:SS', rounding to the nearest whole second."""
    total = int(round_half_up(seconds, 1))
    return f"{total // 60}:{total % 60:02d}"


def round_half_up(value: float, step: int) -> int:
    """Round to the nearest multiple of ``step``; halves go up."""
    return int(math.floor(value / step + 0.5)) * step


def round_to_5(seconds: float) -> int:
    return round_half_up(seconds, 5)


def calc_interval(distance: int, pace_per_100: float, rest_adder_per_100: float = 10) -> int:
    """Send-off for one repetition: swim time plus a rest buffer, both scaled per 100."""
    swim_time = distance / 100 * pace_per_100
    return round_to_5(swim_time + distance / 100 * rest_adder_per_100)


def nice_reps(raw: float) -> int:
    """Snap a raw repetition count to the nearest conventional one (ties go low)."""
    best = NICE_REPS[0]
    best_diff = math.inf
    for candidate in NICE_REPS:
        diff = abs(candidate - raw)
        if diff < best_diff:
            best, best_diff = candidate, diff
    return best


def item_duration(item: SetItem, pace_per_100: float) -> float:
    """Clock time for one leaf item in seconds.

    Interval sets run reps x send-off. Rest sets add the rest between
    repetitions but not after the last one. Continuous sets are pure swim time.
    """
    swim_time = item.distance / 100 * pace_per_100
    timing = item.timing
    if timing is Timing.INTERVAL:
        return item.repetitions * item.interval
    if timing is Timing.REST:
        return item.repetitions * (swim_time + item.rest_seconds) - item.rest_seconds
    return item.repetitions * swim_time


def total_distance(items: Iterable[WorkoutItem]) -> int:
    total = 0
    for item in items:
        if isinstance(item, SetGroup):
            total += item.repetitions * total_distance(item.children)
        else:
            total += item.repetitions * item.distance
    return total


def total_duration(items: Iterable[WorkoutItem], pace_per_100: float) -> float:
    total = 0.0
    for item in items:
        if isinstance(item, SetGroup):
            total += item.repetitions * total_duration(item.children, pace_per_100)
        else:
            total += item_duration(item, pace_per_100)
    return total
