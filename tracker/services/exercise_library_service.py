"""Exercise library use cases."""

from __future__ import annotations

from typing import Any

from tracker.core.errors import ValidationError
from tracker.domain.workouts import ExerciseName, normalize_exercise_name
from tracker.repositories import TrackerRepository


class ExerciseLibraryService:
    """Keeps the set of known exercise names unique."""

    def __init__(self, repository: TrackerRepository) -> None:
        self.repository = repository

    def list(self) -> list[str]:
        return self.repository.list_exercise_names()

    def add(self, name: Any) -> tuple[ExerciseName | None, bool]:
        """
        Insert ``name`` unless it is already in the library.

        Returns ``(record, True)`` when a new entry was stored and
        ``(None, False)`` when the trimmed name already existed.
        """
        candidate = normalize_exercise_name(name)
        if not candidate:
            raise ValidationError("Exercise name is required")
        record = self.repository.insert_exercise_name_if_absent(candidate)
        return record, record is not None
