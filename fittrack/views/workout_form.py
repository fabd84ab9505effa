"""Workout editor: one workout plus its ordered exercises and sets.

Create mode inserts the workout and then its exercises.  Edit mode updates
the workout, deletes every existing workout-exercise row and re-inserts the
in-memory list.  Both run inside a single store session, so a failure at any
step rolls the whole save back and the stored workout is left untouched.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from fittrack.catalog import search_exercises
from fittrack.dependencies import Identity
from fittrack.models.exercises import ExerciseRead
from fittrack.models.workouts import (
    DEFAULT_REPS,
    DEFAULT_WEIGHT,
    SetEntry,
    WorkoutCreate,
    WorkoutDetail,
    WorkoutExerciseRead,
    default_sets,
)
from fittrack.services.store import Store, StoreError
from fittrack.views.base import View
from fittrack.views.profile import ensure_profile

logger = logging.getLogger("fittrack.views.workout_form")

SAVE_ERROR_MESSAGE = "Error saving workout. Please try again."


class WorkoutValidationError(ValueError):
    """Raised when the form is not fit to be saved; nothing was sent."""


class WorkoutNotFoundError(LookupError):
    """Raised when the workout does not exist or belongs to someone else."""


class WorkoutSaveError(Exception):
    """Raised when the store rejected a save; the transaction was rolled back."""


class WorkoutForm(View):
    def __init__(
        self,
        store: Store,
        identity: Identity,
        workout: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(store, identity)
        self.workout = workout
        workout = workout or {}
        self.workout_id: uuid.UUID | None = workout.get("id")
        self.name: str = workout.get("name") or ""
        self.date: date = workout.get("date") or date.today()
        self.duration_minutes: int = workout.get("duration_minutes") or 0
        self.notes: str = workout.get("notes") or ""
        self.catalog: list[ExerciseRead] = []
        self.exercises: list[WorkoutExerciseRead] = []
        # False while an existing workout's exercise rows are unknown; saving
        # then would replace them with an empty list
        self.exercises_loaded = self.workout is None

    @classmethod
    async def open(
        cls, store: Store, identity: Identity, workout_id: uuid.UUID | None = None
    ) -> WorkoutForm:
        """Build a form for a new workout, or for an existing one the user owns."""
        if workout_id is None:
            form = cls(store, identity)
        else:
            row = await store.select_one(
                "workouts",
                filters={"id": workout_id, "user_id": identity.id},
                user_id=identity.id,
            )
            if row is None:
                raise WorkoutNotFoundError(str(workout_id))
            form = cls(store, identity, row)
        await form.load()
        return form

    @property
    def is_edit(self) -> bool:
        return self.workout_id is not None

    # ---------- Loading ----------

    async def load(self) -> None:
        await self.load_catalog()
        if self.is_edit:
            await self.load_exercises()

    async def load_catalog(self) -> None:
        try:
            rows = await self.store.select("exercises", order_by="name", user_id=self.user_id)
        except StoreError:
            logger.exception("Error loading exercises")
            return
        self.catalog = [ExerciseRead.model_validate(r) for r in rows]

    async def load_exercises(self) -> None:
        try:
            rows = await self.store.select(
                "workout_exercises",
                filters={"workout_id": self.workout_id},
                order_by="position",
                user_id=self.user_id,
            )
        except StoreError:
            logger.exception("Error loading workout exercises")
            return
        names = {e.id: e.name for e in self.catalog}
        self.exercises = [
            WorkoutExerciseRead.from_row(r, names.get(r["exercise_id"], "")) for r in rows
        ]
        self.exercises_loaded = True

    # ---------- Editing ----------

    def search(self, term: str) -> list[ExerciseRead]:
        return search_exercises(self.catalog, term)

    def add_exercise(self, exercise: ExerciseRead) -> WorkoutExerciseRead:
        entry = WorkoutExerciseRead(
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            sets=default_sets(),
        )
        self.exercises.append(entry)
        return entry

    def remove_exercise(self, index: int) -> None:
        del self.exercises[index]

    def add_set(self, index: int) -> None:
        """Append a set that repeats the last set's reps and weight."""
        sets = self.exercises[index].sets
        last = sets[-1] if sets else None
        sets.append(
            SetEntry(
                index=len(sets),
                reps=(last.reps if last else 0) or DEFAULT_REPS,
                weight=(last.weight if last else 0) or DEFAULT_WEIGHT,
            )
        )

    def remove_set(self, index: int) -> None:
        """Drop the last set.  An exercise always keeps at least one."""
        sets = self.exercises[index].sets
        if len(sets) > 1:
            sets.pop()

    def update_set(
        self,
        index: int,
        set_index: int,
        *,
        reps: int | None = None,
        weight: Decimal | float | None = None,
    ) -> None:
        sets = self.exercises[index].sets
        current = sets[set_index]
        sets[set_index] = SetEntry(
            index=set_index,
            reps=current.reps if reps is None else reps,
            weight=current.weight if weight is None else weight,
        )

    def update_exercise(
        self, index: int, *, rest_seconds: int | None = None, notes: str | None = None
    ) -> None:
        entry = self.exercises[index]
        if rest_seconds is not None:
            entry.rest_seconds = rest_seconds
        if notes is not None:
            entry.notes = notes

    def apply(self, payload: WorkoutCreate) -> None:
        """Replace the form's fields with a submitted payload."""
        names = {e.id: e.name for e in self.catalog}
        self.name = payload.name
        self.date = payload.date
        self.duration_minutes = payload.duration_minutes
        self.notes = payload.notes or ""
        self.exercises = [
            WorkoutExerciseRead(
                exercise_id=e.exercise_id,
                exercise_name=names.get(e.exercise_id, ""),
                sets=e.sets,
                rest_seconds=e.rest_seconds,
                notes=e.notes,
            )
            for e in payload.exercises
        ]
        self.exercises_loaded = True

    # ---------- Saving ----------

    async def save(self) -> uuid.UUID:
        """Persist the workout and its exercises in one transaction.

        Returns the workout id.  Raises ``WorkoutValidationError`` before
        touching the store when the name is blank, and ``WorkoutSaveError``
        without touching it when an existing workout's exercises never loaded.
        """
        if not self.name.strip():
            raise WorkoutValidationError("Please enter a workout name")
        if not self.exercises_loaded:
            logger.error("Refusing to save workout %s: exercises not loaded", self.workout_id)
            raise WorkoutSaveError(SAVE_ERROR_MESSAGE)

        values = {
            "name": self.name.strip(),
            "date": self.date,
            "duration_minutes": self.duration_minutes,
            "notes": self.notes,
        }
        rows: list[dict[str, Any]] = []
        try:
            async with self.store.session(self.user_id) as s:
                if self.is_edit:
                    updated = await s.update(
                        "workouts",
                        values,
                        filters={"id": self.workout_id, "user_id": self.user_id},
                    )
                    if not updated:
                        raise WorkoutNotFoundError(str(self.workout_id))
                    workout = updated[0]
                    await s.delete("workout_exercises", filters={"workout_id": self.workout_id})
                else:
                    await ensure_profile(s, self.identity)
                    inserted = await s.insert("workouts", {"user_id": self.user_id, **values})
                    workout = inserted[0]

                if self.exercises:
                    rows = await s.insert(
                        "workout_exercises",
                        [
                            {**e.to_row(workout["id"]), "position": i}
                            for i, e in enumerate(self.exercises)
                        ],
                    )
        except StoreError as exc:
            logger.exception("Error saving workout")
            raise WorkoutSaveError(SAVE_ERROR_MESSAGE) from exc

        self.workout = workout
        self.workout_id = workout["id"]
        self.exercises = [
            WorkoutExerciseRead.from_row(row, entry.exercise_name)
            for row, entry in zip(rows, self.exercises)
        ]
        return self.workout_id

    def detail(self) -> WorkoutDetail:
        if self.workout is None:
            raise WorkoutNotFoundError("workout has not been saved")
        return WorkoutDetail(
            id=self.workout["id"],
            user_id=self.workout["user_id"],
            created_at=self.workout.get("created_at"),
            name=self.name,
            date=self.date,
            duration_minutes=self.duration_minutes,
            notes=self.notes or None,
            exercises=self.exercises,
        )
