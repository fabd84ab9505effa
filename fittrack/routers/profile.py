"""Profile endpoints for the authenticated user."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from fittrack.dependencies import CurrentUser, StoreDep
from fittrack.models.profiles import ProfilePage, ProfileUpdate
from fittrack.views.profile import SAVE_ERROR_MESSAGE, ProfileView

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfilePage)
async def get_profile(user: CurrentUser, store: StoreDep) -> Any:
    """Get the user's profile, creating it on first visit."""
    return await ProfileView(store, user).load()


@router.patch("", response_model=ProfilePage)
async def update_profile(user: CurrentUser, store: StoreDep, body: ProfileUpdate) -> Any:
    view = ProfileView(store, user)
    await view.load()
    if not await view.save(body.full_name):
        raise HTTPException(status_code=502, detail=SAVE_ERROR_MESSAGE)
    return view.page()
