"""Workout endpoints: list, detail, create, replace, delete."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from fittrack.dependencies import CurrentUser, StoreDep
from fittrack.models.workouts import WorkoutCreate, WorkoutDetail, WorkoutSummary, WorkoutUpdate
from fittrack.views.workout_form import (
    WorkoutForm,
    WorkoutNotFoundError,
    WorkoutSaveError,
    WorkoutValidationError,
)
from fittrack.views.workouts import WorkoutsView

router = APIRouter(prefix="/workouts", tags=["workouts"])


async def _open_form(view: WorkoutsView, workout_id: uuid.UUID | None) -> WorkoutForm:
    try:
        return await view.form(workout_id)
    except WorkoutNotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")


async def _save(view: WorkoutsView, form: WorkoutForm) -> WorkoutDetail:
    try:
        workout_id = await view.save(form)
    except WorkoutValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except WorkoutNotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")
    except WorkoutSaveError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    saved = await _open_form(view, workout_id)
    return saved.detail()


@router.get("", response_model=list[WorkoutSummary])
async def list_workouts(user: CurrentUser, store: StoreDep) -> Any:
    """All workouts, newest first, each with its exercise count."""
    return await WorkoutsView(store, user).load()


@router.get("/{workout_id}", response_model=WorkoutDetail)
async def get_workout(workout_id: uuid.UUID, user: CurrentUser, store: StoreDep) -> Any:
    form = await _open_form(WorkoutsView(store, user), workout_id)
    return form.detail()


@router.post("", response_model=WorkoutDetail, status_code=201)
async def create_workout(user: CurrentUser, store: StoreDep, body: WorkoutCreate) -> Any:
    view = WorkoutsView(store, user)
    form = await _open_form(view, None)
    form.apply(body)
    return await _save(view, form)


@router.put("/{workout_id}", response_model=WorkoutDetail)
async def replace_workout(
    workout_id: uuid.UUID, user: CurrentUser, store: StoreDep, body: WorkoutUpdate
) -> Any:
    """Replace the workout and its whole exercise list in one transaction."""
    view = WorkoutsView(store, user)
    form = await _open_form(view, workout_id)
    form.apply(body)
    return await _save(view, form)


@router.delete("/{workout_id}", response_model=list[WorkoutSummary])
async def delete_workout(
    workout_id: uuid.UUID,
    user: CurrentUser,
    store: StoreDep,
    confirm: bool = Query(default=False),
) -> Any:
    """Delete a workout and return the refreshed list.

    Requires ``confirm=true``; the store is not contacted otherwise.
    """
    if not confirm:
        raise HTTPException(status_code=428, detail="Confirm deletion with confirm=true")
    view = WorkoutsView(store, user)
    await view.delete(workout_id, confirmed=True)
    return view.workouts
