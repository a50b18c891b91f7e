from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Path, Request
from fastapi.responses import PlainTextResponse

from tracker.core.errors import ValidationError, WorkoutNotFoundError
from tracker.services.workout_service import WorkoutService

router = APIRouter(prefix="/api/workouts", tags=["workouts"])

# ids are stored as signed 64-bit integers
MAX_WORKOUT_ID = 2**63 - 1


def _get_workout_service(request: Request) -> WorkoutService:
    svc = getattr(getattr(request.app, "state", None), "workout_service", None)
    if not svc:
        raise RuntimeError("WorkoutService not configured")
    return svc


@router.get("")
def list_workouts(request: Request):
    svc = _get_workout_service(request)
    return [workout.to_dict() for workout in svc.list()]


@router.get("/{workout_id}")
def get_workout(request: Request, workout_id: int = Path(..., ge=1, le=MAX_WORKOUT_ID)):
    svc = _get_workout_service(request)
    try:
        return svc.get(workout_id).to_dict()
    except WorkoutNotFoundError as exc:
        raise HTTPException(404, str(exc))


@router.post("", status_code=201)
def create_workout(request: Request, payload: Any = Body(None)):
    svc = _get_workout_service(request)
    try:
        workout = svc.create(payload)
    except ValidationError as exc:
        raise HTTPException(400, str(exc))
    return workout.to_dict()


@router.put("/{workout_id}")
def update_workout(
    request: Request,
    workout_id: int = Path(..., ge=1, le=MAX_WORKOUT_ID),
    payload: Any = Body(None),
):
    svc = _get_workout_service(request)
    try:
        workout = svc.update(workout_id, payload)
    except ValidationError as exc:
        raise HTTPException(400, str(exc))
    except WorkoutNotFoundError as exc:
        raise HTTPException(404, str(exc))
    return workout.to_dict()


@router.delete("/{workout_id}", response_class=PlainTextResponse)
def delete_workout(request: Request, workout_id: int = Path(..., ge=1, le=MAX_WORKOUT_ID)):
    svc = _get_workout_service(request)
    try:
        svc.delete(workout_id)
    except WorkoutNotFoundError as exc:
        raise HTTPException(404, str(exc))
    return PlainTextResponse("Workout deleted")
