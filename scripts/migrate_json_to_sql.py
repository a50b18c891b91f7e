#!/usr/bin/env python3
"""
One-off migration script: JSON document (data.json) -> SQL database.

Workouts keep their ids and createdAt; exercise names are inserted if absent,
so the script can be re-run safely.

Usage:
  python scripts/migrate_json_to_sql.py [--source data.json] [--database-url sqlite:///./tracker.db]
"""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Make the tracker package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tracker.core.config import get_settings  # noqa: E402
from tracker.db.session import build_engine  # noqa: E402
from tracker.repositories.json_storage import JSONRepository, workout_from_dict  # noqa: E402
from tracker.repositories.sql_repository import SQLRepository  # noqa: E402


def migrate(source: JSONRepository, target: SQLRepository) -> tuple[int, int]:
    """Copy every record from ``source`` into ``target``; returns (workouts, new names)."""
    if not source.path.exists():
        raise SystemExit(f"File not found: {source.path}")
    db = source.load()

    workouts = 0
    for item in db["workouts"]:
        target.import_workout(workout_from_dict(item))
        workouts += 1

    names = 0
    for item in db["exercise_library"]:
        name = (item.get("name") or "").strip()
        if name and target.insert_exercise_name_if_absent(name) is not None:
            names += 1

    target.sync_id_sequences()
    return workouts, names


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Migrate the JSON document store into SQL")
    ap.add_argument("--source", default=settings.data_file, help="JSON document path (default: DATA_FILE)")
    ap.add_argument("--database-url", default=settings.database_url, help="Target URL (default: DATABASE_URL)")
    args = ap.parse_args()

    target = SQLRepository(build_engine(args.database_url))
    target.init()
    try:
        workouts, names = migrate(JSONRepository(args.source), target)
    finally:
        target.close()
    print(f"Migrated {workouts} workouts and {names} exercise names.")


if __name__ == "__main__":
    main()
