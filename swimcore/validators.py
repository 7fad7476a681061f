"""Pydantic validation models for workout generation requests."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from swimcore.errors import InvalidWorkoutRequest
from swimcore.models import Unit
from swimcore.services.rng import MAX_SEED
from swimcore.services.swim_math import parse_pace

ALLOWED_DURATIONS = (30, 60, 90, 120)


class WorkoutRequestInput(BaseModel):
    duration: int = Field(gt=0, le=600, description=f"Minutes; the UI offers {ALLOWED_DURATIONS}")
    pace: str = Field(min_length=3, max_length=8, description="Comfortable pace per 100 as M:SS")
    unit: Optional[Unit] = None
    seed: Optional[int] = Field(default=None, ge=0, le=MAX_SEED)

    @field_validator("pace")
    @classmethod
    def valid_pace(cls, v):
        try:
            parse_pace(v)
        except InvalidWorkoutRequest as exc:
            raise ValueError(str(exc)) from exc
        return v.strip()
