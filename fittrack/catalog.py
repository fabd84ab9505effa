"""Exercise catalog: the seeded reference exercises and the picker search.

The catalog lives in the ``exercises`` table and is loaded once by the
schema migration; ``SEED_EXERCISES`` mirrors that seed so code and tests can
refer to it without a database.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

from fittrack.models.exercises import ExerciseRead

SEED_EXERCISES: list[dict] = [
    {
        "name": "Push-ups",
        "category": "Bodyweight",
        "muscle_groups": ["chest", "triceps", "shoulders"],
        "instructions": "Start in plank position, lower body to ground, push back up",
    },
    {
        "name": "Squats",
        "category": "Bodyweight",
        "muscle_groups": ["quadriceps", "glutes", "hamstrings"],
        "instructions": "Stand with feet shoulder-width apart, lower hips back and down, return to standing",
    },
    {
        "name": "Pull-ups",
        "category": "Bodyweight",
        "muscle_groups": ["back", "biceps"],
        "instructions": "Hang from bar, pull body up until chin clears bar, lower with control",
    },
    {
        "name": "Bench Press",
        "category": "Weightlifting",
        "muscle_groups": ["chest", "triceps", "shoulders"],
        "instructions": "Lie on bench, lower bar to chest, press back up",
    },
    {
        "name": "Deadlift",
        "category": "Weightlifting",
        "muscle_groups": ["back", "hamstrings", "glutes"],
        "instructions": "Stand with feet hip-width apart, hinge at hips, lift bar by extending hips and knees",
    },
    {
        "name": "Plank",
        "category": "Core",
        "muscle_groups": ["core", "shoulders"],
        "instructions": "Hold body in straight line from head to heels, engage core muscles",
    },
    {
        "name": "Lunges",
        "category": "Bodyweight",
        "muscle_groups": ["quadriceps", "glutes", "hamstrings"],
        "instructions": "Step forward into lunge position, lower back knee toward ground, return to standing",
    },
    {
        "name": "Burpees",
        "category": "Cardio",
        "muscle_groups": ["full_body"],
        "instructions": "Squat down, jump back to plank, do push-up, jump feet to hands, jump up with arms overhead",
    },
]

E = TypeVar("E", bound=ExerciseRead)


def matches(exercise: ExerciseRead, term: str) -> bool:
    """Case-insensitive substring match on name or category."""
    needle = term.strip().lower()
    return needle in exercise.name.lower() or needle in exercise.category.lower()


def search_exercises(catalog: Iterable[E], term: str = "") -> list[E]:
    if not term.strip():
        return list(catalog)
    return [e for e in catalog if matches(e, term)]
