"""Profile: one row per identity, created on first visit.

Workouts and goals reference ``profiles(id)``, so any view that inserts an
owned row calls ``ensure_profile`` inside the same session first.
"""

from __future__ import annotations

import logging
from typing import Any

from fittrack.dependencies import Identity
from fittrack.models.base import utc_now
from fittrack.models.profiles import ProfilePage, ProfileRead
from fittrack.services.store import StoreError, StoreSession
from fittrack.views.base import View

logger = logging.getLogger("fittrack.views.profile")

SAVE_ERROR_MESSAGE = "Error updating profile. Please try again."


async def ensure_profile(session: StoreSession, identity: Identity) -> dict[str, Any]:
    """Return the identity's profile row, inserting it if it does not exist yet."""
    row = await session.select_one("profiles", filters={"id": identity.id})
    if row is not None:
        return row
    logger.info("Creating profile for %s", identity.id)
    inserted = await session.insert(
        "profiles", {"id": identity.id, "full_name": identity.full_name or ""}
    )
    return inserted[0]


class ProfileView(View):
    profile: ProfileRead | None

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.profile = None

    async def load(self) -> ProfilePage:
        """Fetch the profile, inserting one seeded from the identity if absent."""
        try:
            async with self.store.session(self.user_id) as s:
                row = await ensure_profile(s, self.identity)
            self.profile = ProfileRead.model_validate(row)
        except StoreError:
            logger.exception("Error loading profile")
        return self.page()

    async def save(self, full_name: str) -> bool:
        """Update the display name and touch ``updated_at``."""
        now = utc_now()
        try:
            rows = await self.store.update(
                "profiles",
                {"full_name": full_name, "updated_at": now},
                filters={"id": self.user_id},
                user_id=self.user_id,
            )
        except StoreError:
            logger.exception("Error updating profile")
            return False
        if not rows:
            return False
        self.profile = ProfileRead.model_validate(rows[0])
        return True

    def page(self) -> ProfilePage:
        return ProfilePage(
            profile=self.profile,
            email=self.identity.email,
            member_since=self.profile.created_at.date() if self.profile else None,
        )
