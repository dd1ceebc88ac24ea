import logging
from datetime import datetime, timedelta
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import DayOfWeek, FitnessGoal, FitnessLevel, MuscleGroup
from app.models.user import User
from app.repositories.plan_repository import PlanRepository
from app.repositories.playlist_repository import PlaylistRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.playlist import PlaylistExercise, WorkoutSet
from app.schemas.schedule import CycleCreate, ScheduledWorkoutCreate, WeekCreate
from app.schemas.workout import ExerciseEntry, WorkoutCreate
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

SAMPLE_EMAIL = "test@example.com"


def _exercise(name: str, group: MuscleGroup, color: str, weight: float, reps: int, sets: int = 3) -> PlaylistExercise:
    return PlaylistExercise(
        name=name,
        muscle_group=group,
        color=color,
        sets=[WorkoutSet(weight=weight, reps=reps) for _ in range(sets)],
    )


SAMPLE_PLAYLISTS = [
    ("Push Day", "Chest, Shoulders, and Triceps", [
        ("Bench Press", MuscleGroup.CHEST, "#FF4B4B", 135, 10),
        ("Overhead Press", MuscleGroup.SHOULDERS, "#FFD74B", 95, 10),
        ("Tricep Extensions", MuscleGroup.TRICEPS, "#FF7CFF", 45, 12),
    ]),
    ("Pull Day", "Back and Biceps", [
        ("Pull-ups", MuscleGroup.BACK, "#4B83FF", 0, 10),
        ("Barbell Rows", MuscleGroup.BACK, "#7CA6FF", 135, 10),
        ("Bicep Curls", MuscleGroup.BICEPS, "#FF4BFF", 30, 12),
    ]),
    ("Leg Day", "Lower Body Focus", [
        ("Squats", MuscleGroup.QUADS, "#4BFF83", 185, 8),
        ("Deadlifts", MuscleGroup.HAMSTRINGS, "#7CFFA6", 225, 6),
        ("Leg Press", MuscleGroup.QUADS, "#B4FFC9", 270, 10),
    ]),
]


async def create_sample_data(session: AsyncSession) -> User:
    """Демо-пользователь с плейлистами Push/Pull/Legs, шаблоном недели и циклом"""
    now = datetime.utcnow()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    user = User(
        email=SAMPLE_EMAIL,
        password=auth_service.hash_password("password123"),
        name="John Doe",
        fitness_level=FitnessLevel.INTERMEDIATE,
        fitness_goal=FitnessGoal.build_muscle,
        created_at=now,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)

    playlists = PlaylistRepository(session)
    playlist_ids: List[int] = []
    for name, description, exercises in SAMPLE_PLAYLISTS:
        playlist = await playlists.create(
            user.id,
            name=name,
            description=description,
            exercises=[_exercise(*exercise) for exercise in exercises],
        )
        playlist_ids.append(playlist.id)
    push_id, pull_id, legs_id = playlist_ids

    plans = PlanRepository(session)
    week = await plans.create_week(user.id, WeekCreate(
        name="Push/Pull/Legs Week",
        schedule={
            DayOfWeek.MONDAY: push_id,
            DayOfWeek.WEDNESDAY: pull_id,
            DayOfWeek.FRIDAY: legs_id,
        },
        start_date=today,
        is_template=True,
    ))
    await plans.create_cycle(user.id, CycleCreate(
        name="4-Week Strength Building",
        description="Progressive overload focusing on compound movements",
        week_ids=[week.id],
        auto_rotate=True,
    ))

    await ScheduleRepository(session).create_many(user.id, [
        ScheduledWorkoutCreate(playlist_id=push_id, date=today),
        ScheduledWorkoutCreate(playlist_id=pull_id, date=today + timedelta(days=1)),
    ])

    await WorkoutRepository(session).create(user.id, WorkoutCreate(
        type="Strength",
        date=now - timedelta(days=1),
        duration=45,
        exercises=[ExerciseEntry(name="Bench Press", muscle_group=MuscleGroup.CHEST, set_count=3)],
    ))

    logger.info(f"✅ Создан демо-пользователь: {user.email} (ID: {user.id})")
    return user
