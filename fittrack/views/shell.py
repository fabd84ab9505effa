"""App shell: navigation between the four views and screen resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fittrack.dependencies import Identity


class Screen(str, Enum):
    loading = "loading"
    auth = "auth"
    dashboard = "dashboard"
    workouts = "workouts"
    goals = "goals"
    profile = "profile"


@dataclass(frozen=True)
class NavItem:
    id: Screen
    name: str


NAVIGATION: tuple[NavItem, ...] = (
    NavItem(Screen.dashboard, "Dashboard"),
    NavItem(Screen.workouts, "Workouts"),
    NavItem(Screen.goals, "Goals"),
    NavItem(Screen.profile, "Profile"),
)

DEFAULT_VIEW = Screen.dashboard
_VIEW_IDS = {item.id.value for item in NAVIGATION}


class AppShell:
    """Holds the current view selection; nothing else."""

    def __init__(self, current_view: str | Screen = DEFAULT_VIEW) -> None:
        self.current_view = DEFAULT_VIEW
        self.select(current_view)

    @property
    def navigation(self) -> tuple[NavItem, ...]:
        return NAVIGATION

    def select(self, view: str | Screen) -> Screen:
        """Switch views.  Unknown ids fall back to the dashboard."""
        value = view.value if isinstance(view, Screen) else view
        self.current_view = Screen(value) if value in _VIEW_IDS else DEFAULT_VIEW
        return self.current_view

    def screen(self, identity: Identity | None, *, pending: bool = False) -> Screen:
        if pending:
            return Screen.loading
        if identity is None:
            return Screen.auth
        return self.current_view

    @staticmethod
    def greeting(identity: Identity) -> str:
        return identity.full_name or identity.email or ""
