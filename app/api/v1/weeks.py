from typing import List

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_plan_repository, get_workout_service
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.repositories.plan_repository import PlanRepository
from app.schemas.schedule import ApplyWeekRequest, ScheduledWorkoutRead, WeekCreate, WorkoutWeekRead
from app.services.workout_service import WorkoutService

router = APIRouter(tags=["weeks"])


@router.get("", response_model=List[WorkoutWeekRead])
async def list_weeks(
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    return await repo.list_weeks(current_user.id)


@router.post("", response_model=WorkoutWeekRead, status_code=status.HTTP_201_CREATED)
async def create_week(
    week: WeekCreate,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    return await repo.create_week(current_user.id, week)


@router.get("/{week_id}", response_model=WorkoutWeekRead)
async def get_week(
    week_id: int,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    week = await repo.get_week(current_user.id, week_id)
    if week is None:
        raise NotFoundError("Неделя", week_id)
    return week


@router.put("/{week_id}", response_model=WorkoutWeekRead)
async def update_week(
    week_id: int,
    week: WeekCreate,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    updated = await repo.update_week(current_user.id, week_id, week)
    if updated is None:
        raise NotFoundError("Неделя", week_id)
    return updated


@router.delete("/{week_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_week(
    week_id: int,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    if not await repo.delete_week(current_user.id, week_id):
        raise NotFoundError("Неделя", week_id)


@router.post("/{week_id}/apply", response_model=List[ScheduledWorkoutRead])
async def apply_week(
    week_id: int,
    request: ApplyWeekRequest,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service)
):
    """Запланировать плейлисты шаблона на неделю, начинающуюся с week_start"""
    scheduled = await service.apply_week(current_user.id, week_id, request.week_start)
    if scheduled is None:
        raise NotFoundError("Неделя", week_id)
    return scheduled
