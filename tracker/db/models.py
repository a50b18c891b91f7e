"""SQLAlchemy models mirroring the JSON document collections."""
from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    DateTime,
    Integer,
    JSON,
    String,
    func,
)

from .session import Base

# JSON-era ids are millisecond timestamps; SQLite only autoincrements INTEGER keys,
# and only AUTOINCREMENT tables never reuse the id of a deleted row
IdType = BigInteger().with_variant(Integer(), "sqlite")


class WorkoutRow(Base):
    __tablename__ = "workouts"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(IdType, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, index=True)
    workout_type = Column(String(255), nullable=False)
    exercises = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ExerciseLibraryRow(Base):
    __tablename__ = "exercise_library"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
