"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.dialects import postgresql, sqlite

from tracker.core.errors import StorageError
from tracker.db.session import build_engine
from tracker.domain.workouts import Workout
from tracker.repositories.sql_repository import SQLRepository, exercise_names_query


def test_init_creates_both_tables_idempotently(sql_repo):
    sql_repo.init()
    tables = set(inspect(sql_repo.engine).get_table_names())
    assert {"workouts", "exercise_library"} <= tables


def test_created_at_is_timezone_aware(sql_repo):
    workout = sql_repo.create_workout(date(2024, 1, 1), "Leg Day", [])
    assert workout.created_at.tzinfo is not None
    assert sql_repo.list_workouts()[0].created_at.tzinfo is not None


def test_exercises_payload_round_trips_verbatim(sql_repo):
    payload = [{"name": "Squat", "sets": [{"reps": 5, "weight": 100.5}], "notes": None}]
    workout = sql_repo.create_workout(date(2024, 1, 1), "Leg Day", payload)
    assert sql_repo.get_workout(workout.id).exercises == payload


def test_duplicate_exercise_name_keeps_single_row(sql_repo):
    first = sql_repo.insert_exercise_name_if_absent("Deadlift")
    second = sql_repo.insert_exercise_name_if_absent("Deadlift")

    assert first is not None
    assert second is None
    assert sql_repo.list_exercise_names() == ["Deadlift"]


def test_import_workout_keeps_id_and_created_at(sql_repo):
    created_at = datetime(2023, 5, 1, 8, 30, tzinfo=timezone.utc)
    sql_repo.import_workout(
        Workout(id=1700000000000, date=date(2023, 5, 1), workout_type="Legacy", exercises=[], created_at=created_at)
    )

    workout = sql_repo.get_workout(1700000000000)
    assert workout is not None
    assert workout.created_at == created_at
    assert sql_repo.create_workout(date(2023, 5, 2), "New", []).id != 1700000000000


def test_sync_id_sequences_is_noop_on_sqlite(sql_repo):
    sql_repo.sync_id_sequences()


def test_query_on_missing_tables_raises_storage_error(tmp_path):
    repo = SQLRepository(build_engine(f"sqlite:///{tmp_path / 'empty.db'}"))
    try:
        with pytest.raises(StorageError):
            repo.list_workouts()
    finally:
        repo.close()


def test_empty_database_url_is_rejected():
    with pytest.raises(RuntimeError):
        build_engine("  ")


def test_exercise_names_sort_by_codepoint_on_postgresql():
    compiled = str(exercise_names_query("postgresql").compile(dialect=postgresql.dialect()))
    assert "COLLATE" in compiled
    assert "COLLATE" not in str(exercise_names_query("sqlite").compile(dialect=sqlite.dialect()))


def test_tables_use_sqlite_autoincrement(sql_repo):
    with sql_repo.engine.connect() as conn:
        ddl = conn.execute(text("SELECT sql FROM sqlite_master WHERE name = 'workouts'")).scalar_one()
    assert "AUTOINCREMENT" in ddl.upper()
