from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user, get_plan_repository, get_workout_service
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.repositories.plan_repository import PlanRepository
from app.schemas.schedule import CycleCreate, WorkoutCycleRead
from app.services.workout_service import WorkoutService

router = APIRouter(tags=["cycles"])


async def check_weeks_exist(repo: PlanRepository, user_id: int, cycle: CycleCreate) -> None:
    weeks = await repo.get_weeks(user_id, cycle.week_ids)
    found = {week.id for week in weeks}
    missing = [week_id for week_id in cycle.week_ids if week_id not in found]
    if missing:
        raise HTTPException(status_code=400, detail=f"Недели не найдены: {missing}")


@router.get("", response_model=List[WorkoutCycleRead])
async def list_cycles(
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    return await repo.list_cycles(current_user.id)


@router.post("", response_model=WorkoutCycleRead, status_code=status.HTTP_201_CREATED)
async def create_cycle(
    cycle: CycleCreate,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    await check_weeks_exist(repo, current_user.id, cycle)
    return await repo.create_cycle(current_user.id, cycle)


@router.get("/{cycle_id}", response_model=WorkoutCycleRead)
async def get_cycle(
    cycle_id: int,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    cycle = await repo.get_cycle(current_user.id, cycle_id)
    if cycle is None:
        raise NotFoundError("Цикл", cycle_id)
    return cycle


@router.put("/{cycle_id}", response_model=WorkoutCycleRead)
async def update_cycle(
    cycle_id: int,
    cycle: CycleCreate,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    await check_weeks_exist(repo, current_user.id, cycle)
    updated = await repo.update_cycle(current_user.id, cycle_id, cycle)
    if updated is None:
        raise NotFoundError("Цикл", cycle_id)
    return updated


@router.delete("/{cycle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cycle(
    cycle_id: int,
    current_user: User = Depends(get_current_user),
    repo: PlanRepository = Depends(get_plan_repository)
):
    if not await repo.delete_cycle(current_user.id, cycle_id):
        raise NotFoundError("Цикл", cycle_id)


@router.post("/{cycle_id}/advance", response_model=WorkoutCycleRead)
async def advance_cycle(
    cycle_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service)
):
    """Перейти к следующей неделе цикла (по кругу при auto_rotate)"""
    cycle = await service.advance_cycle(current_user.id, cycle_id)
    if cycle is None:
        raise NotFoundError("Цикл", cycle_id)
    return cycle
