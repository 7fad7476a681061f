from __future__ import annotations


class SwimWorkoutError(Exception):
    pass


class InvalidWorkoutRequest(SwimWorkoutError, ValueError):
    """Request parameters that cannot be turned into a workout (bad pace, duration or unit)."""


class WorkoutCompositionError(SwimWorkoutError, RuntimeError):
    """A generator produced a section the composer refuses to emit."""
