from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from tracker.core.errors import ValidationError
from tracker.domain.workouts import exercise_name_from_payload
from tracker.services.exercise_library_service import ExerciseLibraryService

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


def _get_library_service(request: Request) -> ExerciseLibraryService:
    svc = getattr(getattr(request.app, "state", None), "exercise_library_service", None)
    if not svc:
        raise RuntimeError("ExerciseLibraryService not configured")
    return svc


@router.get("")
def list_exercise_names(request: Request):
    return _get_library_service(request).list()


@router.post("")
def add_exercise_name(request: Request, payload: Any = Body(None)):
    svc = _get_library_service(request)
    try:
        record, created = svc.add(exercise_name_from_payload(payload))
    except ValidationError as exc:
        raise HTTPException(400, str(exc))
    if not created:
        return PlainTextResponse("Exercise already exists", status_code=200)
    return JSONResponse(record.to_dict(), status_code=201)
