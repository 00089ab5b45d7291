"""Default exercise catalog and idempotent seeding."""

from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from fitfeed.db.models import Exercise

_BENCH_IMAGE = (
    "https://lh3.googleusercontent.com/aida-public/AB6AXuBgUeEKDm5ipw5A__J6h7qY7tjE9fKFS9EbslSlKIbxt6_KMEq3rcbtC_vNkTgJ4SNm"
    "bTvnJ6kzgiSjDHxR80NF0Qz_8TdW-a32VWvWUmXNpzj6zoxSx5CnacHRjdAEDK-cHURCvEGhWybD6FWVNjvkxwFa--0jUWU5SVNxW7gFWPvR7mdVEHtIy"
    "zowONpYuWGuYqDYS-EJzh2ITNOJ_z0K91BIzOIWpvgbAyIjWqfRwFjrlN4Vuh_z-_ra7HKMSmQQ4hX5WS5IpQ"
)
_INCLINE_IMAGE = (
    "https://lh3.googleusercontent.com/aida-public/AB6AXuB0mVvs5Tvl50WjGpfwEQhpyE4zZbvezSQL_sFbu95chrGq3owR3FIc4Yml6Z35ZrSf"
    "A_pss0jPFVsVu9Vgw9Fo-m0iJn_6X_E0RDvfH4BAJ1HLtAlLQqq8sbTyLFOJwY_xp_A3pPPoMxgllIejVR7fasOEXu5v-m3DZteyoY6htJ0MajMHRUoFOl"
    "R3pgXmdq0FBNZmniqp8LIaTQLbP4nHz4wp01al-69wb3GoMyfsxmGIJozDxpoUFYoWbj24OTgkSOF10DF2VQ"
)
_PULLUP_IMAGE = (
    "https://lh3.googleusercontent.com/aida-public/AB6AXuBEUGOeGjFbOhaXDRbJ84n1YjHqlXIvIcoJ3PZf-JopXqzRv6STav4Y_ZjbX8HzFL8x"
    "iqXgBdfXuWLY2Jxj5Thscv5QRKbk-Fot75PVvG6HVWJMyUhfjrPP97qSUEn36RDnaf28e6vaWLGDxiFASKRij3iuQyjqBIqVL2xzur54jNYjCx49tgB0"
    "24utJYi__HrOXKsGHnxr1NFRZrNuJ_Ns0_PsA91VvgVhpmymEKmAiuuw18RL3zYsxcFTPHGPi3hmn-94MYOpYA"
)

# (name, muscle_group, type, image, default_sets, default_reps, default_rest)
DEFAULT_EXERCISES: list[tuple[str, str, str, str | None, int, str, int]] = [
    ("Barbell Bench Press", "Chest • Compound", "strength", _BENCH_IMAGE, 4, "8-10", 90),
    ("Incline Dumbbell Press", "Chest • Compound", "strength", _INCLINE_IMAGE, 3, "10-12", 60),
    ("Weighted Pullups", "Back • Compound", "strength", _PULLUP_IMAGE, 3, "AMRAP", 120),
    ("Barbell Squat", "Legs • Compound", "strength", None, 4, "6-8", 120),
    ("Deadlift", "Back • Compound", "strength", None, 3, "5", 180),
    ("Overhead Press", "Shoulders • Compound", "strength", None, 4, "8-10", 90),
    ("Lateral Raises", "Shoulders • Isolation", "strength", None, 3, "12-15", 45),
    ("Bicep Curls", "Arms • Isolation", "strength", None, 3, "10-12", 60),
    ("Tricep Extensions", "Arms • Isolation", "strength", None, 3, "12-15", 60),
    ("Plank", "Core • Isolation", "strength", None, 3, "60s", 60),
    ("Running", "Cardio", "cardio", None, 1, "30min", 0),
    ("Cycling", "Cardio", "cardio", None, 1, "45min", 0),
    ("Burpees", "Full Body • Compound", "hiit", None, 3, "15", 60),
    ("Mountain Climbers", "Core • Compound", "hiit", None, 3, "30s", 30),
    ("Jump Rope", "Cardio", "cardio", None, 5, "1min", 60),
    ("Romanian Deadlift", "Legs • Compound", "strength", None, 3, "8-10", 90),
    ("Leg Press", "Legs • Compound", "strength", None, 4, "10-12", 90),
    ("Lat Pulldown", "Back • Compound", "strength", None, 3, "10-12", 60),
    ("Face Pulls", "Shoulders • Isolation", "strength", None, 3, "15", 45),
    ("Dips", "Triceps • Compound", "strength", None, 3, "10-12", 90),
]


def seed_exercises(session: Session) -> int:
    """Insert catalog exercises whose name is not already present.

    Args:
        session: Database session (caller commits)

    Returns:
        Number of exercises inserted
    """
    existing_names = set(session.execute(select(Exercise.name)).scalars().all())

    created = 0
    for name, muscle_group, exercise_type, image, sets, reps, rest in DEFAULT_EXERCISES:
        if name in existing_names:
            continue
        session.add(
            Exercise(
                name=name,
                muscle_group=muscle_group,
                type=exercise_type,
                image=image,
                default_sets=sets,
                default_reps=reps,
                default_rest=rest,
            )
        )
        created += 1

    session.flush()
    logger.info(f"[SEED] Created {created} new exercises ({len(DEFAULT_EXERCISES)} total)")
    return created
