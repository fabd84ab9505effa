"""FitTrack views.

Each view fetches its own slice of the user's data, keeps the snapshot,
computes display aggregates and re-fetches after every mutation.  Views take
the store explicitly; none of them share state.

Modules:
    dashboard    — headline stats and recent workouts
    workouts     — workout list, delete, open editor
    workout_form — workout editor with exercises and sets
    goals        — goals with progress and achieved toggle
    profile      — get-or-create profile, rename
    shell        — navigation and screen resolution
"""

from fittrack.views.dashboard import DashboardView
from fittrack.views.goals import GoalsView
from fittrack.views.profile import ProfileView
from fittrack.views.shell import AppShell, Screen
from fittrack.views.workout_form import (
    WorkoutForm,
    WorkoutNotFoundError,
    WorkoutSaveError,
    WorkoutValidationError,
)
from fittrack.views.workouts import WorkoutsView

__all__ = [
    "AppShell",
    "DashboardView",
    "GoalsView",
    "ProfileView",
    "Screen",
    "WorkoutForm",
    "WorkoutNotFoundError",
    "WorkoutSaveError",
    "WorkoutValidationError",
    "WorkoutsView",
]
