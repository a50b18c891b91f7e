"""
Persistence adapters.

Services depend on the ``TrackerRepository`` protocol rather than on a
concrete store; ``build_repository`` picks the JSON document or SQL strategy
from settings at startup.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from tracker.core.config import Settings
from tracker.domain.workouts import ExerciseName, Workout


class TrackerRepository(Protocol):
    backend: str

    def init(self) -> None: ...

    def close(self) -> None: ...

    def list_workouts(self) -> list[Workout]: ...

    def get_workout(self, workout_id: int) -> Optional[Workout]: ...

    def create_workout(self, workout_date: date, workout_type: str, exercises: list) -> Workout: ...

    def update_workout(
        self, workout_id: int, workout_date: date, workout_type: str, exercises: list
    ) -> Optional[Workout]: ...

    def delete_workout(self, workout_id: int) -> bool: ...

    def list_exercise_names(self) -> list[str]: ...

    def insert_exercise_name_if_absent(self, name: str) -> Optional[ExerciseName]: ...


def build_repository(settings: Settings) -> TrackerRepository:
    """Instantiate the storage strategy selected by ``STORAGE_BACKEND``."""
    if settings.storage_backend == "sql":
        from tracker.db.session import build_engine
        from tracker.repositories.sql_repository import SQLRepository

        return SQLRepository(build_engine(settings.database_url, echo=settings.database_echo))
    from tracker.repositories.json_storage import JSONRepository

    return JSONRepository(settings.data_file)
