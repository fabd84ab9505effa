"""Exercise catalog endpoint (read-only)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from fittrack.dependencies import CurrentUser, StoreDep
from fittrack.models.exercises import ExerciseRead
from fittrack.views.workout_form import WorkoutForm

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    user: CurrentUser,
    store: StoreDep,
    search: str = Query(default="", max_length=100),
) -> Any:
    """Catalog ordered by name, filtered by name or category substring."""
    form = WorkoutForm(store, user)
    await form.load_catalog()
    return form.search(search)
