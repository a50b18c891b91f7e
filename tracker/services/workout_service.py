"""Workout use cases (validation, create/update/delete)."""

from __future__ import annotations

import logging
from typing import Any

from tracker.core.errors import ValidationError, WorkoutNotFoundError
from tracker.domain.workouts import Workout, missing_workout_fields, parse_workout_date
from tracker.repositories import TrackerRepository

logger = logging.getLogger(__name__)


class WorkoutService:
    """Validates workout payloads and delegates persistence to the repository."""

    def __init__(self, repository: TrackerRepository) -> None:
        self.repository = repository

    def _validated(self, payload: Any) -> tuple:
        missing = missing_workout_fields(payload)
        if missing:
            logger.info("Rejected workout payload, missing %s", ", ".join(missing))
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        workout_date = parse_workout_date(payload["date"])
        if workout_date is None:
            raise ValidationError(f"Invalid date: {payload['date']!r}")
        workout_type = payload["workoutType"]
        if not isinstance(workout_type, str) or not workout_type.strip():
            raise ValidationError("workoutType must be a non-empty string")
        return workout_date, workout_type, payload["exercises"]

    def list(self) -> list[Workout]:
        return self.repository.list_workouts()

    def get(self, workout_id: int) -> Workout:
        workout = self.repository.get_workout(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        return workout

    def create(self, payload: Any) -> Workout:
        workout_date, workout_type, exercises = self._validated(payload)
        return self.repository.create_workout(workout_date, workout_type, exercises)

    def update(self, workout_id: int, payload: Any) -> Workout:
        workout_date, workout_type, exercises = self._validated(payload)
        workout = self.repository.update_workout(workout_id, workout_date, workout_type, exercises)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        return workout

    def delete(self, workout_id: int) -> None:
        if not self.repository.delete_workout(workout_id):
            raise WorkoutNotFoundError(workout_id)
