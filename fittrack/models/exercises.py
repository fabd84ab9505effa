"""Pydantic models for the exercise catalog (read-only reference)."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from fittrack.models.base import FitTrackBase


class ExerciseRead(FitTrackBase):
    id: uuid.UUID
    name: str
    category: str
    muscle_groups: list[str] = Field(default_factory=list)
    instructions: str | None = None
    created_at: datetime | None = None
