"""Pydantic models for the dashboard overview."""

from __future__ import annotations

from pydantic import Field

from fittrack.models.base import FitTrackBase
from fittrack.models.workouts import WorkoutSummary


class DashboardStats(FitTrackBase):
    total_workouts: int = 0
    total_minutes: int = 0
    active_goals: int = 0
    weekly_workouts: int = 0


class DashboardRead(FitTrackBase):
    stats: DashboardStats = Field(default_factory=DashboardStats)
    recent_workouts: list[WorkoutSummary] = Field(default_factory=list)
