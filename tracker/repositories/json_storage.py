"""
JSON document persistence adapter.

The whole store is a single JSON document; every operation reads it,
mutates one collection and writes it back. A process-local lock serializes
read-modify-write cycles so concurrent handler threads cannot interleave.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import time
from datetime import date, datetime, timezone
from pathlib import Path

from tracker.core.errors import StorageError
from tracker.domain.workouts import ExerciseName, Workout, parse_workout_date

logger = logging.getLogger(__name__)


def db_defaults(db: dict) -> dict:
    db.setdefault("workouts", [])
    db.setdefault("exercise_library", [])
    last_ids = db.setdefault("last_ids", {})
    last_ids.setdefault("workouts", 0)
    last_ids.setdefault("exercise_library", 0)
    return db


def workout_from_dict(data: dict) -> Workout:
    created = data.get("createdAt")
    workout_date = parse_workout_date(data.get("date"))
    if workout_date is None:
        raise ValueError(f"invalid date {data.get('date')!r}")
    return Workout(
        id=int(data["id"]),
        date=workout_date,
        workout_type=data["workoutType"],
        exercises=data.get("exercises") or [],
        created_at=datetime.fromisoformat(created) if created else datetime.fromtimestamp(0, tz=timezone.utc),
    )


class JSONRepository:
    """Document-file strategy: one JSON file holding both collections."""

    backend = "json"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    # -------------------------- lifecycle --------------------------
    def init(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Using JSON document store at %s", self.path)

    def close(self) -> None:
        pass

    # -------------------------- document io --------------------------
    def load(self) -> dict:
        try:
            if self.path.exists():
                with self.path.open("r", encoding="utf-8") as f:
                    return db_defaults(json.load(f))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read {self.path}") from exc
        return db_defaults({})

    def save(self, db: dict) -> None:
        payload = json.dumps(db, ensure_ascii=False, indent=2)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}") from exc

    def _next_id(self, db: dict, collection: str) -> int:
        # millisecond timestamp, bumped past every id ever handed out for the collection
        candidate = int(time.time() * 1000)
        highest = max((int(r.get("id") or 0) for r in db[collection]), default=0)
        highest = max(highest, int(db["last_ids"].get(collection) or 0))
        new_id = max(candidate, highest + 1)
        db["last_ids"][collection] = new_id
        return new_id

    # -------------------------- workouts --------------------------
    def list_workouts(self) -> list[Workout]:
        with self._lock:
            db = self.load()
        try:
            workouts = [workout_from_dict(item) for item in db["workouts"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Malformed workout record in {self.path}") from exc
        return sorted(workouts, key=lambda w: (w.date, w.id), reverse=True)

    def get_workout(self, workout_id: int) -> Workout | None:
        for workout in self.list_workouts():
            if workout.id == workout_id:
                return workout
        return None

    def create_workout(self, workout_date: date, workout_type: str, exercises: list) -> Workout:
        with self._lock:
            db = self.load()
            workout = Workout(
                id=self._next_id(db, "workouts"),
                date=workout_date,
                workout_type=workout_type,
                exercises=exercises,
                created_at=datetime.now(timezone.utc),
            )
            db["workouts"].append(workout.to_dict())
            self.save(db)
        logger.info("Created workout %s (%s)", workout.id, workout.workout_type)
        return workout

    def update_workout(
        self, workout_id: int, workout_date: date, workout_type: str, exercises: list
    ) -> Workout | None:
        with self._lock:
            db = self.load()
            for idx, item in enumerate(db["workouts"]):
                if int(item.get("id") or 0) != workout_id:
                    continue
                try:
                    current = workout_from_dict(item)
                except (KeyError, TypeError, ValueError) as exc:
                    raise StorageError(f"Malformed workout record {workout_id} in {self.path}") from exc
                updated = Workout(
                    id=current.id,
                    date=workout_date,
                    workout_type=workout_type,
                    exercises=exercises,
                    created_at=current.created_at,
                )
                db["workouts"][idx] = updated.to_dict()
                self.save(db)
                logger.info("Updated workout %s", workout_id)
                return updated
        return None

    def delete_workout(self, workout_id: int) -> bool:
        with self._lock:
            db = self.load()
            remaining = [item for item in db["workouts"] if int(item.get("id") or 0) != workout_id]
            if len(remaining) == len(db["workouts"]):
                return False
            db["workouts"] = remaining
            self.save(db)
        logger.info("Deleted workout %s", workout_id)
        return True

    # -------------------------- exercise library --------------------------
    def list_exercise_names(self) -> list[str]:
        with self._lock:
            db = self.load()
        return sorted(str(item.get("name")) for item in db["exercise_library"] if item.get("name"))

    def insert_exercise_name_if_absent(self, name: str) -> ExerciseName | None:
        with self._lock:
            db = self.load()
            library = db["exercise_library"]
            if any(item.get("name") == name for item in library):
                return None
            record = ExerciseName(id=self._next_id(db, "exercise_library"), name=name)
            library.append(record.to_dict())
            self.save(db)
        logger.info("Added exercise name %r", name)
        return record
