"""Display aggregates computed over rows already fetched for one user.

These are linear scans over small per-user collections; nothing here talks
to the store.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Mapping

WEEKLY_WINDOW_DAYS = 7


def total_minutes(workouts: Iterable[Mapping[str, Any]]) -> int:
    """Sum of ``duration_minutes``; missing or null durations count as 0."""
    return sum(w.get("duration_minutes") or 0 for w in workouts)


def week_start(today: date, days: int = WEEKLY_WINDOW_DAYS) -> date:
    return today - timedelta(days=days)


def in_window(workout_date: date, today: date, days: int = WEEKLY_WINDOW_DAYS) -> bool:
    """True when the workout falls within the trailing window.

    The boundary is inclusive: a workout dated exactly ``days`` days ago counts.
    """
    return workout_date >= week_start(today, days)


def weekly_workouts(
    workouts: Iterable[Mapping[str, Any]],
    today: date,
    days: int = WEEKLY_WINDOW_DAYS,
) -> int:
    return sum(1 for w in workouts if w.get("date") and in_window(w["date"], today, days))


def exercise_counts(rows: Iterable[Mapping[str, Any]]) -> Counter:
    """Map workout id -> number of workout-exercise rows referencing it."""
    return Counter(r["workout_id"] for r in rows)


def goal_progress(current: Decimal | float, target: Decimal | float) -> float:
    """Percentage of target reached, clamped to [0, 100].

    A non-positive target cannot be reached meaningfully; such goals are
    reported as complete rather than dividing by zero.
    """
    if target <= 0:
        return 100.0
    pct = float(current) / float(target) * 100
    return max(0.0, min(pct, 100.0))
