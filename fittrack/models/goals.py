"""Pydantic models for user goals."""

from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal
from enum import Enum

from pydantic import Field, computed_field

from fittrack.models.base import FitTrackBase
from fittrack.stats import goal_progress


# ---------- Enums ----------

class GoalType(str, Enum):
    weight_loss = "Weight Loss"
    weight_gain = "Weight Gain"
    workout_count = "Workout Count"
    running_distance = "Running Distance"
    push_ups = "Push-ups"
    bench_press = "Bench Press"
    squat = "Squat"
    deadlift = "Deadlift"


GOAL_UNITS: dict[str, str | None] = {
    GoalType.weight_loss.value: "lbs",
    GoalType.weight_gain.value: "lbs",
    GoalType.workout_count.value: None,
    GoalType.running_distance.value: "miles",
    GoalType.push_ups.value: None,
    GoalType.bench_press.value: "lbs",
    GoalType.squat.value: "lbs",
    GoalType.deadlift.value: "lbs",
}


# ---------- Goals ----------

class GoalBase(FitTrackBase):
    type: GoalType
    # Zero targets are rejected; progress against them is undefined
    target_value: Decimal = Field(gt=0)
    current_value: Decimal = Decimal("0")
    target_date: dt.date | None = None


class GoalCreate(GoalBase):
    pass


class GoalUpdate(GoalBase):
    """Full replacement of the form fields; ``achieved`` is toggled separately."""


class GoalRead(FitTrackBase):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str  # stored as free text
    target_value: Decimal
    current_value: Decimal = Decimal("0")
    target_date: dt.date | None = None
    achieved: bool = False
    created_at: dt.datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        return goal_progress(self.current_value, self.target_value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unit(self) -> str | None:
        return GOAL_UNITS.get(self.type)
