"""Exceptions shared by services and repositories."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker workflows."""


class ValidationError(TrackerError):
    """Raised when a request payload is missing required fields."""


class WorkoutNotFoundError(TrackerError):
    """Raised when a workout id does not exist in the store."""

    def __init__(self, workout_id: int) -> None:
        super().__init__(f"Workout {workout_id} not found")
        self.workout_id = workout_id


class StorageError(TrackerError):
    """Raised when the persistence layer fails (I/O, connectivity, constraints)."""
