"""Workout list: every workout of the user with its exercise count."""

from __future__ import annotations

import logging
import uuid

from fittrack.models.workouts import WorkoutSummary
from fittrack.services.store import StoreError
from fittrack.views.base import View
from fittrack.views.workout_form import WorkoutForm

logger = logging.getLogger("fittrack.views.workouts")


class WorkoutsView(View):
    workouts: list[WorkoutSummary]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.workouts = []

    async def load(self) -> list[WorkoutSummary]:
        try:
            rows = await self.store.select(
                "workouts",
                filters={"user_id": self.user_id},
                order_by="date",
                descending=True,
                user_id=self.user_id,
            )
            self.workouts = await self.summarize_workouts(rows)
        except StoreError:
            logger.exception("Error loading workouts")
        return self.workouts

    async def delete(self, workout_id: uuid.UUID, *, confirmed: bool) -> bool:
        """Delete a workout (its exercises cascade) and re-fetch the list.

        Nothing is sent unless ``confirmed``.  A rejected delete is logged and
        reported as ``False``.
        """
        if not confirmed:
            return False
        deleted = 0
        try:
            deleted = await self.store.delete(
                "workouts",
                filters={"id": workout_id, "user_id": self.user_id},
                user_id=self.user_id,
            )
        except StoreError:
            logger.exception("Error deleting workout")
        await self.load()
        return deleted > 0

    async def form(self, workout_id: uuid.UUID | None = None) -> WorkoutForm:
        """Open the editor for a new workout, or for ``workout_id``."""
        return await WorkoutForm.open(self.store, self.identity, workout_id)

    async def save(self, form: WorkoutForm) -> uuid.UUID:
        workout_id = await form.save()
        await self.load()
        return workout_id
