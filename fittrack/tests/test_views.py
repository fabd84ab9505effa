"""Tests for the dashboard, workouts, goals, profile and shell views."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from fittrack.dependencies import Identity
from fittrack.models.goals import GoalCreate, GoalType, GoalUpdate
from fittrack.tests.fakes import OTHER_USER_ID, TODAY, USER_ID, FakeStore
from fittrack.views import (
    AppShell,
    DashboardView,
    GoalsView,
    ProfileView,
    Screen,
    WorkoutsView,
)


def _workout(store: FakeStore, days_ago: int, minutes: int | None, name: str = "Run", user=USER_ID):
    return store.seed(
        "workouts",
        user_id=user,
        name=name,
        date=TODAY - timedelta(days=days_ago),
        duration_minutes=minutes,
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class TestDashboard:
    @pytest.mark.asyncio
    async def test_empty_user_gets_zero_stats(self, store, identity) -> None:
        result = await DashboardView(store, identity).load(TODAY)
        assert result.stats.total_workouts == 0
        assert result.stats.total_minutes == 0
        assert result.stats.active_goals == 0
        assert result.stats.weekly_workouts == 0
        assert result.recent_workouts == []

    @pytest.mark.asyncio
    async def test_stats_and_weekly_boundary(self, store, identity) -> None:
        _workout(store, 0, 30)
        _workout(store, 7, 40)
        _workout(store, 8, 50)
        _workout(store, 1, None)
        _workout(store, 0, 999, user=OTHER_USER_ID)
        store.seed("user_goals", user_id=USER_ID, type="Squat", target_value=Decimal("300"))
        store.seed(
            "user_goals", user_id=USER_ID, type="Deadlift",
            target_value=Decimal("400"), achieved=True,
        )

        result = await DashboardView(store, identity).load(TODAY)

        assert result.stats.total_workouts == 4
        assert result.stats.total_minutes == 120
        assert result.stats.active_goals == 1
        assert result.stats.weekly_workouts == 3

    @pytest.mark.asyncio
    async def test_recent_workouts_limited_newest_first(self, store, catalog, identity) -> None:
        for days_ago in range(7):
            _workout(store, days_ago, 20, name=f"W{days_ago}")
        newest = store.rows("workouts", name="W0")[0]
        store.seed(
            "workout_exercises", workout_id=newest["id"], exercise_id=catalog["Plank"]
        )

        result = await DashboardView(store, identity).load(TODAY)

        assert [w.name for w in result.recent_workouts] == ["W0", "W1", "W2", "W3", "W4"]
        assert result.recent_workouts[0].exercise_count == 1
        assert result.recent_workouts[1].exercise_count == 0

    @pytest.mark.asyncio
    async def test_failed_fetch_keeps_last_known_stats(self, store, identity) -> None:
        _workout(store, 0, 30)
        view = DashboardView(store, identity)
        await view.load(TODAY)
        assert view.stats.total_workouts == 1

        _workout(store, 0, 30)
        store.fail_on("select", "workouts")
        result = await view.load(TODAY)
        assert result.stats.total_workouts == 1

    @pytest.mark.asyncio
    async def test_failed_recent_fetch_still_updates_stats(self, store, identity) -> None:
        _workout(store, 0, 30)
        store.fail_on("select", "workout_exercises")
        result = await DashboardView(store, identity).load(TODAY)
        assert result.stats.total_workouts == 1
        assert result.recent_workouts == []


# ---------------------------------------------------------------------------
# Workouts list
# ---------------------------------------------------------------------------


class TestWorkoutsView:
    @pytest.mark.asyncio
    async def test_list_ordered_by_date_with_counts(self, store, seeded_workout, identity) -> None:
        _workout(store, 3, 25, name="Older")
        workouts = await WorkoutsView(store, identity).load()
        assert [w.name for w in workouts] == ["Push Day", "Older"]
        assert workouts[0].exercise_count == 2
        assert workouts[1].exercise_count == 0

    @pytest.mark.asyncio
    async def test_only_own_workouts_listed(self, store, seeded_workout, other_identity) -> None:
        assert await WorkoutsView(store, other_identity).load() == []

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation(self, store, seeded_workout, identity) -> None:
        view = WorkoutsView(store, identity)
        assert await view.delete(seeded_workout["id"], confirmed=False) is False
        assert ("delete", "workouts") not in store.calls
        assert len(store.rows("workouts")) == 1

    @pytest.mark.asyncio
    async def test_delete_cascades_and_refetches(self, store, seeded_workout, identity) -> None:
        view = WorkoutsView(store, identity)
        await view.load()
        assert len(view.workouts) == 1

        assert await view.delete(seeded_workout["id"], confirmed=True) is True

        assert view.workouts == []
        assert store.rows("workout_exercises", workout_id=seeded_workout["id"]) == []

    @pytest.mark.asyncio
    async def test_rejected_delete_is_swallowed(self, store, seeded_workout, identity) -> None:
        store.fail_on("delete", "workouts")
        view = WorkoutsView(store, identity)
        assert await view.delete(seeded_workout["id"], confirmed=True) is False
        assert [w.name for w in view.workouts] == ["Push Day"]

    @pytest.mark.asyncio
    async def test_cannot_delete_other_users_workout(
        self, store, seeded_workout, other_identity
    ) -> None:
        view = WorkoutsView(store, other_identity)
        assert await view.delete(seeded_workout["id"], confirmed=True) is False
        assert len(store.rows("workouts")) == 1

    @pytest.mark.asyncio
    async def test_save_through_list_refetches(self, store, catalog, identity) -> None:
        view = WorkoutsView(store, identity)
        form = await view.form()
        form.name = "Core"
        form.add_exercise(next(e for e in form.catalog if e.name == "Plank"))
        await view.save(form)
        assert [(w.name, w.exercise_count) for w in view.workouts] == [("Core", 1)]


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


class TestGoalsView:
    @pytest.mark.asyncio
    async def test_create_then_listed_newest_first(self, store, identity) -> None:
        view = GoalsView(store, identity)
        assert await view.save(GoalCreate(type=GoalType.squat, target_value=Decimal("300")))
        assert await view.save(
            GoalCreate(
                type=GoalType.push_ups,
                target_value=Decimal("200"),
                current_value=Decimal("50"),
            )
        )
        assert [g.type for g in view.goals] == ["Push-ups", "Squat"]
        assert view.goals[0].progress == pytest.approx(25.0)
        assert view.goals[0].user_id == USER_ID

    @pytest.mark.asyncio
    async def test_update_goal(self, store, identity) -> None:
        goal = store.seed("user_goals", user_id=USER_ID, type="Squat", target_value=Decimal("200"))
        view = GoalsView(store, identity)
        ok = await view.save(
            GoalUpdate(
                type=GoalType.squat,
                target_value=Decimal("200"),
                current_value=Decimal("250"),
            ),
            goal["id"],
        )
        assert ok
        assert view.goals[0].progress == 100.0
        assert view.goals[0].achieved is False

    @pytest.mark.asyncio
    async def test_toggle_achieved_is_manual(self, store, identity) -> None:
        store.seed("user_goals", user_id=USER_ID, type="Squat", target_value=Decimal("1"))
        view = GoalsView(store, identity)
        await view.load()
        await view.toggle_achieved(view.goals[0])
        assert view.goals[0].achieved is True
        await view.toggle_achieved(view.goals[0])
        assert view.goals[0].achieved is False

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation(self, store, identity) -> None:
        goal = store.seed("user_goals", user_id=USER_ID, type="Squat", target_value=Decimal("1"))
        view = GoalsView(store, identity)
        assert await view.delete(goal["id"], confirmed=False) is False
        assert ("delete", "user_goals") not in store.calls
        assert await view.delete(goal["id"], confirmed=True) is True
        assert view.goals == []

    @pytest.mark.asyncio
    async def test_save_failure_reported(self, store, identity) -> None:
        store.fail_on("insert", "user_goals")
        view = GoalsView(store, identity)
        ok = await view.save(GoalCreate(type=GoalType.squat, target_value=Decimal("1")))
        assert ok is False
        assert store.rows("user_goals") == []
        assert store.rows("profiles") == []

    @pytest.mark.asyncio
    async def test_first_goal_creates_profile(self, store, other_identity) -> None:
        view = GoalsView(store, other_identity)
        assert await view.save(GoalCreate(type=GoalType.squat, target_value=Decimal("100")))
        assert store.rows("profiles", id=OTHER_USER_ID)[0]["full_name"] == ""
        assert [g.user_id for g in view.goals] == [OTHER_USER_ID]

    @pytest.mark.asyncio
    async def test_stored_zero_target_does_not_crash(self, store, identity) -> None:
        store.seed(
            "user_goals", user_id=USER_ID, type="Workout Count",
            target_value=Decimal("0"), current_value=Decimal("4"),
        )
        goals = await GoalsView(store, identity).load()
        assert goals[0].progress == 100.0


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class TestProfileView:
    @pytest.mark.asyncio
    async def test_missing_profile_created_from_identity(self, store, identity) -> None:
        page = await ProfileView(store, identity).load()
        assert page.profile is not None
        assert page.profile.full_name == "Ana Runner"
        assert page.email == "ana@example.com"
        assert page.member_since is not None
        assert len(store.rows("profiles", id=USER_ID)) == 1

    @pytest.mark.asyncio
    async def test_identity_without_name_gets_empty_name(self, store, other_identity) -> None:
        page = await ProfileView(store, other_identity).load()
        assert page.profile.full_name == ""

    @pytest.mark.asyncio
    async def test_existing_profile_not_recreated(self, store, identity) -> None:
        store.seed("profiles", id=USER_ID, full_name="Ana R.")
        page = await ProfileView(store, identity).load()
        assert page.profile.full_name == "Ana R."
        assert ("insert", "profiles") not in store.calls

    @pytest.mark.asyncio
    async def test_save_updates_name_and_timestamp(self, store, identity) -> None:
        row = store.seed(
            "profiles", id=USER_ID, full_name="Ana",
            updated_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )
        view = ProfileView(store, identity)
        await view.load()
        assert await view.save("Ana Runner-Smith") is True
        assert view.profile.full_name == "Ana Runner-Smith"
        stored = store.rows("profiles", id=USER_ID)[0]
        assert stored["updated_at"] > row["updated_at"]

    @pytest.mark.asyncio
    async def test_failed_save_keeps_snapshot(self, store, identity) -> None:
        store.seed("profiles", id=USER_ID, full_name="Ana")
        view = ProfileView(store, identity)
        await view.load()
        store.fail_on("update", "profiles")
        assert await view.save("Other") is False
        assert view.profile.full_name == "Ana"


# ---------------------------------------------------------------------------
# Shell
# ---------------------------------------------------------------------------


class TestAppShell:
    def test_defaults_to_dashboard(self) -> None:
        assert AppShell().current_view == Screen.dashboard

    def test_select_known_view(self) -> None:
        shell = AppShell()
        assert shell.select("goals") == Screen.goals

    def test_unknown_view_falls_back(self) -> None:
        shell = AppShell("workouts")
        assert shell.select("settings") == Screen.dashboard
        assert AppShell("auth").current_view == Screen.dashboard

    def test_screen_resolution(self, identity: Identity) -> None:
        shell = AppShell("profile")
        assert shell.screen(identity, pending=True) == Screen.loading
        assert shell.screen(None) == Screen.auth
        assert shell.screen(identity) == Screen.profile

    def test_navigation_is_fixed(self) -> None:
        assert [item.id.value for item in AppShell().navigation] == [
            "dashboard", "workouts", "goals", "profile",
        ]

    def test_greeting_prefers_full_name(self, identity: Identity, other_identity: Identity) -> None:
        assert AppShell.greeting(identity) == "Ana Runner"
        assert AppShell.greeting(other_identity) == "bo@example.com"
