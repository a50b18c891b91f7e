"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.core.errors import StorageError
from tracker.db.create_tables import create_all
from tracker.db.models import ExerciseLibraryRow, WorkoutRow
from tracker.db.session import build_sessionmaker
from tracker.domain.workouts import ExerciseName, Workout

logger = logging.getLogger(__name__)

# dialects with a native INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def exercise_names_query(dialect_name: str):
    """Names in codepoint order, matching the JSON store's ``sorted``."""
    column = ExerciseLibraryRow.name
    if dialect_name == "postgresql":
        # locale collations fold case; "C" compares bytes
        column = column.collate("C")
    return select(ExerciseLibraryRow.name).order_by(column.asc())


def _row_to_workout(row: WorkoutRow) -> Workout:
    return Workout(
        id=row.id,
        date=row.date,
        workout_type=row.workout_type,
        exercises=row.exercises if row.exercises is not None else [],
        created_at=_aware(row.created_at),
    )


class SQLRepository:
    """Relational strategy: ``workouts`` and ``exercise_library`` tables."""

    backend = "sql"

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessionmaker = build_sessionmaker(engine)

    # -------------------------- lifecycle --------------------------
    def init(self) -> None:
        try:
            create_all(self.engine)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to create tables") from exc
        logger.info("Using SQL store (%s dialect)", self.engine.dialect.name)

    def close(self) -> None:
        self.engine.dispose()

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(str(exc)) from exc
        finally:
            session.close()

    # -------------------------- workouts --------------------------
    def list_workouts(self) -> list[Workout]:
        with self.get_session() as session:
            stmt = select(WorkoutRow).order_by(WorkoutRow.date.desc(), WorkoutRow.id.desc())
            return [_row_to_workout(row) for row in session.execute(stmt).scalars().all()]

    def get_workout(self, workout_id: int) -> Optional[Workout]:
        with self.get_session() as session:
            row = session.get(WorkoutRow, workout_id)
            return _row_to_workout(row) if row else None

    def create_workout(self, workout_date: date, workout_type: str, exercises: list) -> Workout:
        entity = WorkoutRow(
            date=workout_date,
            workout_type=workout_type,
            exercises=exercises,
            created_at=datetime.now(timezone.utc),
        )
        with self.get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            workout = _row_to_workout(entity)
        logger.info("Created workout %s (%s)", workout.id, workout.workout_type)
        return workout

    def update_workout(
        self, workout_id: int, workout_date: date, workout_type: str, exercises: list
    ) -> Optional[Workout]:
        with self.get_session() as session:
            stmt = (
                update(WorkoutRow)
                .where(WorkoutRow.id == workout_id)
                .values(date=workout_date, workout_type=workout_type, exercises=exercises)
            )
            result = session.execute(stmt)
            session.commit()
            if result.rowcount == 0:
                return None
            row = session.get(WorkoutRow, workout_id)
            if row is None:
                # deleted by a concurrent request between the update and the read
                return None
            workout = _row_to_workout(row)
        logger.info("Updated workout %s", workout_id)
        return workout

    def delete_workout(self, workout_id: int) -> bool:
        with self.get_session() as session:
            result = session.execute(delete(WorkoutRow).where(WorkoutRow.id == workout_id))
            session.commit()
            deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted workout %s", workout_id)
        return deleted

    # -------------------------- exercise library --------------------------
    def list_exercise_names(self) -> list[str]:
        with self.get_session() as session:
            stmt = exercise_names_query(self.engine.dialect.name)
            return list(session.execute(stmt).scalars().all())

    def insert_exercise_name_if_absent(self, name: str) -> Optional[ExerciseName]:
        now = datetime.now(timezone.utc)
        insert_fn = _UPSERT_INSERTS.get(self.engine.dialect.name)
        with self.get_session() as session:
            if insert_fn is not None:
                stmt = (
                    insert_fn(ExerciseLibraryRow.__table__)
                    .values(name=name, created_at=now)
                    .on_conflict_do_nothing(index_elements=["name"])
                )
                result = session.execute(stmt)
                session.commit()
                if result.rowcount == 0:
                    return None
            else:
                session.add(ExerciseLibraryRow(name=name, created_at=now))
                try:
                    session.commit()
                except IntegrityError:
                    session.rollback()
                    return None
            row_id = session.execute(
                select(ExerciseLibraryRow.id).where(ExerciseLibraryRow.name == name)
            ).scalar_one()
        logger.info("Added exercise name %r", name)
        return ExerciseName(id=row_id, name=name)

    # -------------------------- json import --------------------------
    def import_workout(self, workout: Workout) -> None:
        """Insert or overwrite a workout keeping its id and createdAt."""
        with self.get_session() as session:
            session.merge(
                WorkoutRow(
                    id=workout.id,
                    date=workout.date,
                    workout_type=workout.workout_type,
                    exercises=workout.exercises,
                    created_at=workout.created_at,
                )
            )
            session.commit()

    def sync_id_sequences(self) -> None:
        """Move PostgreSQL serial sequences past ids inserted explicitly."""
        if self.engine.dialect.name != "postgresql":
            return
        with self.get_session() as session:
            for table in (WorkoutRow.__tablename__, ExerciseLibraryRow.__tablename__):
                session.execute(
                    text(
                        f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                        f"COALESCE((SELECT MAX(id) FROM {table}), 0) + 1, false)"
                    )
                )
            session.commit()
