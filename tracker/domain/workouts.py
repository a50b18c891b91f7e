"""Domain records and payload checks for workouts and exercise names."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

REQUIRED_WORKOUT_FIELDS = ("date", "workoutType", "exercises")


@dataclass(frozen=True)
class Workout:
    id: int
    date: date
    workout_type: str
    exercises: list
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "workoutType": self.workout_type,
            "exercises": self.exercises,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ExerciseName:
    id: int
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


def missing_workout_fields(payload: Any) -> list[str]:
    """Return the required fields that are absent or falsy in the payload."""
    if not isinstance(payload, Mapping):
        return list(REQUIRED_WORKOUT_FIELDS)
    return [field for field in REQUIRED_WORKOUT_FIELDS if not payload.get(field)]


def parse_workout_date(value: Any) -> date | None:
    """
    Parse a calendar date from the wire.

    Accepts ``YYYY-MM-DD`` and full ISO datetimes (the time part is dropped).
    Returns None when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def normalize_exercise_name(value: Any) -> str:
    """Trim surrounding whitespace; non-strings normalize to an empty name."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def exercise_name_from_payload(payload: Any) -> Any:
    """Pull ``name`` out of a request body; non-object bodies carry no name."""
    if not isinstance(payload, Mapping):
        return None
    return payload.get("name")
