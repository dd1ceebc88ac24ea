from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.dependencies import get_current_user, get_workout_repository
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.dates import to_naive_utc
from app.schemas.workout import WorkoutCreate, WorkoutRead

router = APIRouter(tags=["workouts"])


@router.get("", response_model=List[WorkoutRead])
async def list_workouts(
    since: Optional[datetime] = Query(None, description="Начало периода (включительно)"),
    until: Optional[datetime] = Query(None, description="Конец периода (включительно)"),
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Журнал тренировок, новые сверху; since/until ограничивают период"""
    return await repo.list_for_user(current_user.id, since=to_naive_utc(since), until=to_naive_utc(until))


@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
async def create_workout(
    workout: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    return await repo.create(current_user.id, workout)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    workout = await repo.get(current_user.id, workout_id)
    if workout is None:
        raise NotFoundError("Тренировка", workout_id)
    return workout


@router.put("/{workout_id}", response_model=WorkoutRead)
async def replace_workout(
    workout_id: int,
    workout: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Запись заменяется целиком"""
    updated = await repo.replace(current_user.id, workout_id, workout)
    if updated is None:
        raise NotFoundError("Тренировка", workout_id)
    return updated


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    if not await repo.delete(current_user.id, workout_id):
        raise NotFoundError("Тренировка", workout_id)
