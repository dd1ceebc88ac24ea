from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import NotFoundError
from app.core.dependencies import (
    get_current_user,
    get_playlist_repository,
    get_schedule_repository,
    get_workout_service,
)
from app.models.user import User
from app.repositories.playlist_repository import PlaylistRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.schemas.schedule import ScheduledWorkoutCreate, ScheduledWorkoutRead, TodaysWorkoutResponse
from app.services.workout_service import WorkoutService

router = APIRouter(tags=["schedule"])


@router.get("/today", response_model=TodaysWorkoutResponse)
async def get_todays_workout(
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service)
):
    """Невыполненная тренировка на сегодня вместе с её плейлистом"""
    scheduled, playlist = await service.todays_workout(current_user.id)
    return TodaysWorkoutResponse(scheduled=scheduled, playlist=playlist)


@router.get("", response_model=List[ScheduledWorkoutRead])
async def list_scheduled(
    current_user: User = Depends(get_current_user),
    repo: ScheduleRepository = Depends(get_schedule_repository)
):
    return await repo.list_for_user(current_user.id)


@router.post("", response_model=ScheduledWorkoutRead, status_code=status.HTTP_201_CREATED)
async def schedule_workout(
    item: ScheduledWorkoutCreate,
    current_user: User = Depends(get_current_user),
    repo: ScheduleRepository = Depends(get_schedule_repository),
    playlists: PlaylistRepository = Depends(get_playlist_repository)
):
    if await playlists.get(current_user.id, item.playlist_id) is None:
        raise NotFoundError("Плейлист", item.playlist_id)
    return await repo.create(current_user.id, item)


@router.delete("/{scheduled_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scheduled(
    scheduled_id: int,
    current_user: User = Depends(get_current_user),
    repo: ScheduleRepository = Depends(get_schedule_repository)
):
    if not await repo.delete(current_user.id, scheduled_id):
        raise NotFoundError("Запланированная тренировка", scheduled_id)


@router.post(
    "/{scheduled_id}/exercises/{exercise_id}/sets/{set_id}/complete",
    response_model=ScheduledWorkoutRead
)
async def complete_set(
    scheduled_id: int,
    exercise_id: str,
    set_id: str,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service)
):
    """Отметить подход выполненным; при 100% тренировка закрывается автоматически"""
    scheduled = await service.complete_set(current_user.id, scheduled_id, exercise_id, set_id)
    if scheduled is None:
        raise HTTPException(status_code=404, detail="Тренировка, упражнение или подход не найдены")
    return scheduled
