from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from swimcore.validators import WorkoutRequestInput

__all__ = [
    "SetGroupOut",
    "SetItemOut",
    "TemplateOut",
    "WorkoutOut",
    "WorkoutRequestInput",
    "WorkoutSectionOut",
]


class SetItemOut(BaseModel):
    kind: Literal["set"] = "set"
    repetitions: int
    distance: int
    description: str
    stroke: str
    equipment: Optional[str] = None
    timing: str
    interval: Optional[int] = None
    interval_display: Optional[str] = None
    rest_seconds: Optional[int] = None
    rest_display: Optional[str] = None


class SetGroupOut(BaseModel):
    kind: Literal["group"] = "group"
    repetitions: int
    distance: int
    description: str
    children: list[SetItemOut]


WorkoutItemOut = Annotated[Union[SetItemOut, SetGroupOut], Field(discriminator="kind")]


class WorkoutSectionOut(BaseModel):
    name: str
    distance: int
    items: list[WorkoutItemOut]


class WorkoutOut(BaseModel):
    name: str
    duration: int
    pace: str
    unit: str
    total_distance: int
    estimated_minutes: int
    sections: list[WorkoutSectionOut]
    seed: int


class TemplateOut(BaseModel):
    key: str
    name: str
    weight: int
