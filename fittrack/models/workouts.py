"""Pydantic models for workouts and the exercises logged within them.

A workout-exercise owns an ordered list of ``SetEntry`` records.  The
``workout_exercises`` table stores the same information as parallel arrays
(``sets`` count, ``reps[]``, ``weight[]``); ``to_row`` / ``from_row`` are the
only places that translate between the two shapes.
"""

from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal
from typing import Any

from pydantic import Field, field_validator

from fittrack.models.base import FitTrackBase

# Values seeded when an exercise is added to a workout
DEFAULT_SET_COUNT = 3
DEFAULT_REPS = 10
DEFAULT_WEIGHT = Decimal("0")
DEFAULT_REST_SECONDS = 60

# Editor bounds
MAX_REPS = 999
MAX_WEIGHT = Decimal("2000")
MAX_REST_SECONDS = 3600


def _clamp(value, low, high):
    return min(max(value, low), high)


# ---------- Sets ----------

class SetEntry(FitTrackBase):
    index: int = Field(ge=0)
    reps: int = Field(default=DEFAULT_REPS, ge=0, le=MAX_REPS)
    weight: Decimal = Field(default=DEFAULT_WEIGHT, ge=0, le=MAX_WEIGHT)


def default_sets(count: int = DEFAULT_SET_COUNT) -> list[SetEntry]:
    return [SetEntry(index=i) for i in range(count)]


# ---------- Workout Exercises ----------

class WorkoutExerciseBase(FitTrackBase):
    exercise_id: uuid.UUID
    sets: list[SetEntry] = Field(default_factory=default_sets, min_length=1)
    rest_seconds: int = Field(default=DEFAULT_REST_SECONDS, ge=0, le=MAX_REST_SECONDS)
    notes: str = ""

    @field_validator("sets")
    @classmethod
    def _indices_contiguous(cls, v: list[SetEntry]) -> list[SetEntry]:
        if [s.index for s in v] != list(range(len(v))):
            raise ValueError("set indices must run 0..n-1 in order")
        return v

    @property
    def set_count(self) -> int:
        return len(self.sets)

    def to_row(self, workout_id: uuid.UUID) -> dict[str, Any]:
        """Flatten into a ``workout_exercises`` row."""
        return {
            "workout_id": workout_id,
            "exercise_id": self.exercise_id,
            "sets": len(self.sets),
            "reps": [s.reps for s in self.sets],
            "weight": [s.weight for s in self.sets],
            "rest_seconds": self.rest_seconds,
            "notes": self.notes,
        }


class WorkoutExerciseCreate(WorkoutExerciseBase):
    pass


class WorkoutExerciseRead(WorkoutExerciseBase):
    id: uuid.UUID | None = None
    exercise_name: str = ""

    @classmethod
    def from_row(cls, row: dict[str, Any], exercise_name: str = "") -> WorkoutExerciseRead:
        """Build from a stored row.

        The ``sets`` column is authoritative: missing reps / weights are
        padded with the defaults and surplus array entries are dropped.
        Values the columns allow but the editor does not (negative reps,
        weights above ``MAX_WEIGHT``) are clamped into range.
        """
        reps = list(row.get("reps") or [])
        weight = list(row.get("weight") or [])
        count = max(row.get("sets") or 0, 0) or max(len(reps), len(weight), 1)
        entries = [
            SetEntry(
                index=i,
                reps=_clamp(reps[i], 0, MAX_REPS)
                if i < len(reps) and reps[i] is not None
                else DEFAULT_REPS,
                weight=_clamp(Decimal(str(weight[i])), Decimal(0), MAX_WEIGHT)
                if i < len(weight) and weight[i] is not None
                else DEFAULT_WEIGHT,
            )
            for i in range(count)
        ]
        rest = row.get("rest_seconds")
        if rest is None:
            rest = DEFAULT_REST_SECONDS
        return cls(
            id=row.get("id"),
            exercise_id=row["exercise_id"],
            exercise_name=exercise_name,
            sets=entries,
            rest_seconds=_clamp(rest, 0, MAX_REST_SECONDS),
            notes=row.get("notes") or "",
        )


# ---------- Workouts ----------

class WorkoutBase(FitTrackBase):
    name: str = ""
    date: dt.date = Field(default_factory=dt.date.today)
    duration_minutes: int = Field(default=0, ge=0, le=1440)
    notes: str | None = None


class WorkoutCreate(WorkoutBase):
    exercises: list[WorkoutExerciseCreate] = Field(default_factory=list)


class WorkoutUpdate(WorkoutCreate):
    """Full replacement of a workout and its exercises."""


class WorkoutRead(WorkoutBase):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: dt.datetime | None = None


class WorkoutSummary(FitTrackBase):
    """List row: a workout annotated with how many exercises it holds."""

    id: uuid.UUID
    name: str
    date: dt.date
    duration_minutes: int = 0
    notes: str | None = None
    exercise_count: int = 0


class WorkoutDetail(WorkoutRead):
    exercises: list[WorkoutExerciseRead] = Field(default_factory=list)
