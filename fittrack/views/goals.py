"""Goals: numeric targets with a current value and a manual achieved flag."""

from __future__ import annotations

import logging
import uuid

from fittrack.models.goals import GoalCreate, GoalRead, GoalUpdate
from fittrack.services.store import StoreError
from fittrack.views.base import View
from fittrack.views.profile import ensure_profile

logger = logging.getLogger("fittrack.views.goals")


class GoalsView(View):
    goals: list[GoalRead]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.goals = []

    async def load(self) -> list[GoalRead]:
        try:
            rows = await self.store.select(
                "user_goals",
                filters={"user_id": self.user_id},
                order_by="created_at",
                descending=True,
                user_id=self.user_id,
            )
            self.goals = [GoalRead.model_validate(r) for r in rows]
        except StoreError:
            logger.exception("Error loading goals")
        return self.goals

    def find(self, goal_id: uuid.UUID) -> GoalRead | None:
        return next((g for g in self.goals if g.id == goal_id), None)

    async def save(
        self, body: GoalCreate | GoalUpdate, goal_id: uuid.UUID | None = None
    ) -> bool:
        """Create a goal, or update ``goal_id``, then re-fetch.

        Returns ``False`` when the store rejected the write or no owned goal
        matched ``goal_id``.
        """
        values = {
            "type": body.type.value,
            "target_value": body.target_value,
            "current_value": body.current_value,
            "target_date": body.target_date,
        }
        try:
            if goal_id is None:
                async with self.store.session(self.user_id) as s:
                    await ensure_profile(s, self.identity)
                    rows = await s.insert("user_goals", {"user_id": self.user_id, **values})
            else:
                rows = await self.store.update(
                    "user_goals",
                    values,
                    filters={"id": goal_id, "user_id": self.user_id},
                    user_id=self.user_id,
                )
        except StoreError:
            logger.exception("Error saving goal")
            return False
        await self.load()
        return bool(rows)

    async def delete(self, goal_id: uuid.UUID, *, confirmed: bool) -> bool:
        if not confirmed:
            return False
        deleted = 0
        try:
            deleted = await self.store.delete(
                "user_goals",
                filters={"id": goal_id, "user_id": self.user_id},
                user_id=self.user_id,
            )
        except StoreError:
            logger.exception("Error deleting goal")
        await self.load()
        return deleted > 0

    async def toggle_achieved(self, goal: GoalRead) -> bool:
        """Flip the achieved flag.  It is never derived from progress."""
        try:
            rows = await self.store.update(
                "user_goals",
                {"achieved": not goal.achieved},
                filters={"id": goal.id, "user_id": self.user_id},
                user_id=self.user_id,
            )
        except StoreError:
            logger.exception("Error updating goal")
            return False
        await self.load()
        return bool(rows)
