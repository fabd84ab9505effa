"""Dashboard: headline stats and the most recent workouts."""

from __future__ import annotations

import logging
from datetime import date

from fittrack.dependencies import Identity
from fittrack.models.dashboard import DashboardRead, DashboardStats
from fittrack.models.workouts import WorkoutSummary
from fittrack.services.store import Store, StoreError
from fittrack.stats import WEEKLY_WINDOW_DAYS, total_minutes, weekly_workouts
from fittrack.views.base import View

logger = logging.getLogger("fittrack.views.dashboard")

RECENT_WORKOUTS_LIMIT = 5


class DashboardView(View):
    def __init__(
        self,
        store: Store,
        identity: Identity,
        *,
        window_days: int = WEEKLY_WINDOW_DAYS,
        recent_limit: int = RECENT_WORKOUTS_LIMIT,
    ) -> None:
        super().__init__(store, identity)
        self.window_days = window_days
        self.recent_limit = recent_limit
        self.stats = DashboardStats()
        self.recent_workouts: list[WorkoutSummary] = []

    async def load(self, today: date | None = None) -> DashboardRead:
        """Fetch workouts and active goals, then the recent list.

        On failure the error is logged and whatever was already computed
        is kept: stats may refresh while the recent list stays stale.
        """
        today = today or date.today()
        try:
            workouts = await self.store.select(
                "workouts", filters={"user_id": self.user_id}, user_id=self.user_id
            )
            goals = await self.store.select(
                "user_goals",
                columns=["id"],
                filters={"user_id": self.user_id, "achieved": False},
                user_id=self.user_id,
            )
            self.stats = DashboardStats(
                total_workouts=len(workouts),
                total_minutes=total_minutes(workouts),
                active_goals=len(goals),
                weekly_workouts=weekly_workouts(workouts, today, self.window_days),
            )

            recent = await self.store.select(
                "workouts",
                filters={"user_id": self.user_id},
                order_by="date",
                descending=True,
                limit=self.recent_limit,
                user_id=self.user_id,
            )
            self.recent_workouts = await self.summarize_workouts(recent)
        except StoreError:
            logger.exception("Error loading dashboard data")
        return self.snapshot()

    def snapshot(self) -> DashboardRead:
        return DashboardRead(stats=self.stats, recent_workouts=self.recent_workouts)
