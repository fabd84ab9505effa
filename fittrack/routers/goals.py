"""CRUD endpoints for goals."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from fittrack.dependencies import CurrentUser, StoreDep
from fittrack.models.goals import GoalCreate, GoalRead, GoalUpdate
from fittrack.views.goals import GoalsView

router = APIRouter(prefix="/goals", tags=["goals"])


async def _loaded(user: CurrentUser, store: StoreDep) -> GoalsView:
    view = GoalsView(store, user)
    await view.load()
    return view


@router.get("", response_model=list[GoalRead])
async def list_goals(user: CurrentUser, store: StoreDep) -> Any:
    view = await _loaded(user, store)
    return view.goals


@router.post("", response_model=list[GoalRead], status_code=201)
async def create_goal(user: CurrentUser, store: StoreDep, body: GoalCreate) -> Any:
    view = GoalsView(store, user)
    if not await view.save(body):
        raise HTTPException(status_code=502, detail="Error saving goal. Please try again.")
    return view.goals


@router.put("/{goal_id}", response_model=list[GoalRead])
async def update_goal(
    goal_id: uuid.UUID, user: CurrentUser, store: StoreDep, body: GoalUpdate
) -> Any:
    view = await _loaded(user, store)
    if view.find(goal_id) is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    if not await view.save(body, goal_id):
        raise HTTPException(status_code=502, detail="Error saving goal. Please try again.")
    return view.goals


@router.post("/{goal_id}/toggle-achieved", response_model=list[GoalRead])
async def toggle_achieved(goal_id: uuid.UUID, user: CurrentUser, store: StoreDep) -> Any:
    view = await _loaded(user, store)
    goal = view.find(goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    await view.toggle_achieved(goal)
    return view.goals


@router.delete("/{goal_id}", response_model=list[GoalRead])
async def delete_goal(
    goal_id: uuid.UUID,
    user: CurrentUser,
    store: StoreDep,
    confirm: bool = Query(default=False),
) -> Any:
    if not confirm:
        raise HTTPException(status_code=428, detail="Confirm deletion with confirm=true")
    view = GoalsView(store, user)
    await view.delete(goal_id, confirmed=True)
    return view.goals
