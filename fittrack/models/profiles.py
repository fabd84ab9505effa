"""Pydantic models for user profiles."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import Field

from fittrack.models.base import FitTrackBase, TimestampMixin


class ProfileRead(FitTrackBase, TimestampMixin):
    id: uuid.UUID
    full_name: str | None = None


class ProfileUpdate(FitTrackBase):
    full_name: str = Field(default="", max_length=200)


class ProfilePage(FitTrackBase):
    """Profile plus the identity fields shown alongside it."""

    profile: ProfileRead | None = None
    email: str | None = None
    member_since: date | None = None
