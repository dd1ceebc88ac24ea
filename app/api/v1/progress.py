from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import (
    get_current_user,
    get_progress_repository,
    get_schedule_repository,
    get_workout_repository,
)
from app.models.enums import MuscleGroup
from app.models.user import User
from app.repositories.progress_repository import ProgressRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.progress import MuscleGroupProgress, ProgressSummaryResponse
from app.services.progress_tracker import ProgressTracker

router = APIRouter(tags=["progress"])


async def load_recent_workouts(repo: WorkoutRepository, user_id: int, now: datetime):
    """Журнал за окно трекера; сам трекер всё равно фильтрует по дате"""
    return await repo.list_for_user(user_id, since=now - ProgressTracker.WINDOW)


@router.get("/muscle-groups", response_model=List[MuscleGroupProgress])
async def get_muscle_groups_progress(
        current_user: User = Depends(get_current_user),
        repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Подходы за последние 7 дней по каждой группе мышц против цели уровня"""
    now = datetime.utcnow()
    workouts = await load_recent_workouts(repo, current_user.id, now)
    return ProgressTracker.weekly_progress_all(workouts, current_user.fitness_level, now)


@router.get("/muscle-groups/{group}", response_model=MuscleGroupProgress)
async def get_muscle_group_progress(
        group: str,
        current_user: User = Depends(get_current_user),
        repo: WorkoutRepository = Depends(get_workout_repository)
):
    """group - слаг группы мышц, например chest или upper-traps"""
    try:
        muscle_group = MuscleGroup.from_slug(group)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Неизвестная группа мышц: {group}")

    now = datetime.utcnow()
    workouts = await load_recent_workouts(repo, current_user.id, now)
    result = ProgressTracker.weekly_progress(workouts, muscle_group, current_user.fitness_level, now)
    return MuscleGroupProgress(muscle_group=muscle_group, label=muscle_group.label, **result.model_dump())


@router.get("/summary", response_model=ProgressSummaryResponse)
async def get_progress_summary(
        current_user: User = Depends(get_current_user),
        workouts_repo: WorkoutRepository = Depends(get_workout_repository),
        schedule_repo: ScheduleRepository = Depends(get_schedule_repository),
        progress_repo: ProgressRepository = Depends(get_progress_repository)
):
    now = datetime.utcnow()
    workouts = await load_recent_workouts(workouts_repo, current_user.id, now)
    scheduled = await schedule_repo.list_for_user(current_user.id)

    progress = await progress_repo.get(current_user.id)
    if progress is None:
        # Агрегат ещё не сохранялся: он выводится из расписания
        progress = ProgressTracker.summarize(scheduled, now)

    return ProgressSummaryResponse(
        progress=progress,
        muscle_groups=ProgressTracker.weekly_progress_all(workouts, current_user.fitness_level, now),
        todays_workout=ProgressTracker.todays_scheduled_workout(scheduled, now.date())
    )
