from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response, status

from api.ratelimit import generate_limit
from api.schemas import TemplateOut, WorkoutOut, WorkoutRequestInput
from swimcore.config import get_settings
from swimcore.errors import InvalidWorkoutRequest, WorkoutCompositionError
from swimcore.logging_config import get_logger
from swimcore.services.formatter import workout_to_dict
from swimcore.services.set_templates import MAIN_SET_TEMPLATES
from swimcore.services.workout_composer import generate_workout

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1")


@router.post("/workouts/generate", response_model=WorkoutOut, tags=["workouts"])
@generate_limit
def generate(request: Request, response: Response, body: WorkoutRequestInput):
    del request, response
    unit = body.unit or get_settings().default_unit
    try:
        workout = generate_workout(body.duration, body.pace, unit, seed=body.seed)
    except InvalidWorkoutRequest as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except WorkoutCompositionError:
        logger.exception("workout_composition_failed", extra={"ctx_seed": body.seed})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Workout generation failed")
    return workout_to_dict(workout)


@router.get("/workouts/templates", response_model=list[TemplateOut], tags=["workouts"])
def list_templates():
    return [TemplateOut(key=key.value, name=entry.name, weight=entry.weight) for key, entry in MAIN_SET_TEMPLATES.items()]
