"""Domain types for generated swim workouts.

A workout is a tree: sections hold set items, and a set item is either a
leaf (``SetItem``: reps x distance with optional timing) or a group
(``SetGroup``: an ordered round of leaves repeated as a unit). Everything is
frozen; builders always return fresh tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class Stroke(str, Enum):
    FREE = "free"
    BACK = "back"
    BREAST = "breast"
    FLY = "fly"
    IM = "IM"
    CHOICE = "choice"
    MIXED = "mixed"


class Equipment(str, Enum):
    PULL = "pull"
    KICKBOARD = "kickboard"
    FINS = "fins"


class Timing(str, Enum):
    INTERVAL = "interval"
    REST = "rest"
    CONTINUOUS = "continuous"


class Unit(str, Enum):
    METERS = "meters"
    YARDS = "yards"


WARMUP = "Warmup"
PRE_SET = "Pre-Set"
MAIN_SET = "Main Set"
COOLDOWN = "Cooldown"
SECTION_ORDER = (WARMUP, PRE_SET, MAIN_SET, COOLDOWN)


@dataclass(frozen=True)
class SetItem:
    """One line of a workout: ``repetitions`` x ``distance``.

    ``interval`` is the send-off per repetition, ``rest_seconds`` an explicit
    rest between repetitions. At most one is set; neither means continuous.
    """
    repetitions: int
    distance: int
    description: str
    stroke: Stroke = Stroke.FREE
    equipment: Optional[Equipment] = None
    interval: Optional[int] = None
    rest_seconds: Optional[int] = None

    def __post_init__(self) -> None:
        if self.repetitions <= 0:
            raise ValueError(f"repetitions must be positive, got {self.repetitions}")
        if self.distance <= 0:
            raise ValueError(f"distance must be positive, got {self.distance}")
        if self.interval is not None and self.rest_seconds is not None:
            raise ValueError("a set item takes an interval or a rest, not both")

    @property
    def timing(self) -> Timing:
        if self.interval is not None:
            return Timing.INTERVAL
        if self.rest_seconds is not None:
            return Timing.REST
        return Timing.CONTINUOUS


@dataclass(frozen=True)
class SetGroup:
    """A round of set items swum ``repetitions`` times through."""
    repetitions: int
    description: str
    children: tuple[SetItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.repetitions <= 0:
            raise ValueError(f"repetitions must be positive, got {self.repetitions}")
        if not self.children:
            raise ValueError("a set group needs at least one child")

    @property
    def distance(self) -> int:
        # Per-round distance; children are always leaves.
        return sum(child.repetitions * child.distance for child in self.children)


WorkoutItem = Union[SetItem, SetGroup]


@dataclass(frozen=True)
class WorkoutSection:
    name: str
    items: tuple[WorkoutItem, ...]
    distance: int


@dataclass(frozen=True)
class Workout:
    name: str
    duration: int
    pace: str
    unit: Unit
    total_distance: int
    estimated_minutes: int
    sections: tuple[WorkoutSection, ...]
    seed: int

    def section(self, name: str) -> Optional[WorkoutSection]:
        for section in self.sections:
            if section.name == name:
                return section
        return None
