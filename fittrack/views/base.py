"""Common plumbing for views.

A view owns the snapshot it fetched for one identity.  It is built with an
explicit ``Store`` and ``Identity``; every mutation is followed by a full
re-fetch of the view's dataset.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable

from fittrack.dependencies import Identity
from fittrack.models.workouts import WorkoutSummary
from fittrack.services.store import Store
from fittrack.stats import exercise_counts


class View:
    def __init__(self, store: Store, identity: Identity) -> None:
        self.store = store
        self.identity = identity

    @property
    def user_id(self) -> uuid.UUID:
        return self.identity.id

    async def summarize_workouts(self, rows: Iterable[dict[str, Any]]) -> list[WorkoutSummary]:
        """Annotate workout rows with their exercise counts, preserving order."""
        rows = list(rows)
        if not rows:
            return []
        joined = await self.store.select(
            "workout_exercises",
            columns=["id", "workout_id"],
            filters={"workout_id": [r["id"] for r in rows]},
            user_id=self.user_id,
        )
        counts = exercise_counts(joined)
        return [
            WorkoutSummary(
                id=r["id"],
                name=r["name"],
                date=r["date"],
                duration_minutes=r.get("duration_minutes") or 0,
                notes=r.get("notes"),
                exercise_count=counts.get(r["id"], 0),
            )
            for r in rows
        ]
