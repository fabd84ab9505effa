"""Dashboard overview endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from fittrack.dependencies import AppSettings, CurrentUser, StoreDep
from fittrack.models.dashboard import DashboardRead
from fittrack.views.dashboard import DashboardView

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardRead)
async def get_dashboard(
    user: CurrentUser, store: StoreDep, settings: AppSettings
) -> DashboardRead:
    view = DashboardView(
        store,
        user,
        window_days=settings.weekly_window_days,
        recent_limit=settings.recent_workouts_limit,
    )
    return await view.load()
