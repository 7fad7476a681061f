from __future__ import annotations

from typing import Any, Iterable

from swimcore.models import SetGroup, SetItem, Workout, WorkoutItem, WorkoutSection
from swimcore.services.swim_math import format_time


def _format_leaf(item: SetItem) -> dict[str, Any]:
    return {
        "kind": "set",
        "repetitions": item.repetitions,
        "distance": item.distance,
        "description": item.description,
        "stroke": item.stroke.value,
        "equipment": item.equipment.value if item.equipment else None,
        "timing": item.timing.value,
        "interval": item.interval,
        "interval_display": format_time(item.interval) if item.interval is not None else None,
        "rest_seconds": item.rest_seconds,
        "rest_display": format_time(item.rest_seconds) if item.rest_seconds is not None else None,
    }


def format_items(items: Iterable[WorkoutItem]) -> list[dict[str, Any]]:
    """Project set items to display rows, recursing into grouped rounds."""
    rows = []
    for item in items:
        if isinstance(item, SetGroup):
            rows.append({
                "kind": "group",
                "repetitions": item.repetitions,
                "distance": item.distance,
                "description": item.description,
                "children": format_items(item.children),
            })
        else:
            rows.append(_format_leaf(item))
    return rows


def format_section(section: WorkoutSection) -> dict[str, Any]:
    return {"name": section.name, "distance": section.distance, "items": format_items(section.items)}


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    return {
        "name": workout.name,
        "duration": workout.duration,
        "pace": workout.pace,
        "unit": workout.unit.value,
        "total_distance": workout.total_distance,
        "estimated_minutes": workout.estimated_minutes,
        "sections": [format_section(s) for s in workout.sections],
        "seed": workout.seed,
    }
