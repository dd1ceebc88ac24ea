from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import select

from app.models.schedule import WorkoutWeek, WorkoutCycle
from app.repositories.base import BaseRepository
from app.schemas.schedule import CycleCreate, WeekCreate, WorkoutCycleRead, WorkoutWeekRead
from app.services.schedule_planner import clamp_week_index


def dump_schedule(week: WeekCreate) -> Dict[str, Optional[int]]:
    return {day.value: playlist_id for day, playlist_id in week.schedule.items()}


class PlanRepository(BaseRepository):
    """Недельные шаблоны и циклы из них."""

    # ---------- недели ----------

    async def _get_week_row(self, user_id: int, week_id: int) -> Optional[WorkoutWeek]:
        result = await self.db.execute(
            select(WorkoutWeek).where(WorkoutWeek.user_id == user_id, WorkoutWeek.id == week_id)
        )
        return result.scalar_one_or_none()

    async def list_weeks(self, user_id: int) -> List[WorkoutWeekRead]:
        result = await self.db.execute(
            select(WorkoutWeek).where(WorkoutWeek.user_id == user_id).order_by(WorkoutWeek.id.asc())
        )
        return [WorkoutWeekRead.model_validate(row) for row in result.scalars().all()]

    async def get_week(self, user_id: int, week_id: int) -> Optional[WorkoutWeekRead]:
        row = await self._get_week_row(user_id, week_id)
        return WorkoutWeekRead.model_validate(row) if row else None

    async def get_weeks(self, user_id: int, week_ids: List[int]) -> List[WorkoutWeekRead]:
        """Недели в порядке week_ids; удалённые пропускаются"""
        if not week_ids:
            return []
        result = await self.db.execute(
            select(WorkoutWeek).where(WorkoutWeek.user_id == user_id, WorkoutWeek.id.in_(week_ids))
        )
        by_id = {row.id: row for row in result.scalars().all()}
        return [WorkoutWeekRead.model_validate(by_id[week_id]) for week_id in week_ids if week_id in by_id]

    async def create_week(self, user_id: int, data: WeekCreate) -> WorkoutWeekRead:
        row = WorkoutWeek(
            user_id=user_id,
            name=data.name,
            description=data.description,
            schedule=dump_schedule(data),
            start_date=data.start_date,
            end_date=data.end_date,
            is_template=data.is_template,
        )
        self.db.add(row)
        await self.commit()
        return WorkoutWeekRead.model_validate(row)

    async def update_week(self, user_id: int, week_id: int, data: WeekCreate) -> Optional[WorkoutWeekRead]:
        row = await self._get_week_row(user_id, week_id)
        if row is None:
            return None

        row.name = data.name
        row.description = data.description
        row.schedule = dump_schedule(data)
        row.start_date = data.start_date
        row.end_date = data.end_date
        row.is_template = data.is_template
        await self.commit()
        return WorkoutWeekRead.model_validate(row)

    async def delete_week(self, user_id: int, week_id: int) -> bool:
        row = await self._get_week_row(user_id, week_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.commit()
        return True

    # ---------- циклы ----------

    async def _get_cycle_row(self, user_id: int, cycle_id: int) -> Optional[WorkoutCycle]:
        result = await self.db.execute(
            select(WorkoutCycle).where(WorkoutCycle.user_id == user_id, WorkoutCycle.id == cycle_id)
        )
        return result.scalar_one_or_none()

    async def _to_cycle(self, row: WorkoutCycle) -> WorkoutCycleRead:
        weeks = await self.get_weeks(row.user_id, list(row.week_ids or []))
        return WorkoutCycleRead(
            id=row.id,
            name=row.name,
            description=row.description,
            weeks=weeks,
            # индекс остаётся в [0, len(weeks)) даже если недели удалили
            current_week_index=clamp_week_index(row.current_week_index, len(weeks)),
            auto_rotate=row.auto_rotate,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def list_cycles(self, user_id: int) -> List[WorkoutCycleRead]:
        result = await self.db.execute(
            select(WorkoutCycle).where(WorkoutCycle.user_id == user_id).order_by(WorkoutCycle.id.asc())
        )
        return [await self._to_cycle(row) for row in result.scalars().all()]

    async def get_cycle(self, user_id: int, cycle_id: int) -> Optional[WorkoutCycleRead]:
        row = await self._get_cycle_row(user_id, cycle_id)
        return await self._to_cycle(row) if row else None

    async def create_cycle(self, user_id: int, data: CycleCreate) -> WorkoutCycleRead:
        now = datetime.utcnow()
        row = WorkoutCycle(
            user_id=user_id,
            name=data.name,
            description=data.description,
            week_ids=list(data.week_ids),
            current_week_index=data.current_week_index,
            auto_rotate=data.auto_rotate,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        await self.commit()
        return await self._to_cycle(row)

    async def update_cycle(self, user_id: int, cycle_id: int, data: CycleCreate) -> Optional[WorkoutCycleRead]:
        row = await self._get_cycle_row(user_id, cycle_id)
        if row is None:
            return None

        row.name = data.name
        row.description = data.description
        row.week_ids = list(data.week_ids)
        row.current_week_index = data.current_week_index
        row.auto_rotate = data.auto_rotate
        row.updated_at = datetime.utcnow()
        await self.commit()
        return await self._to_cycle(row)

    async def set_week_index(self, user_id: int, cycle_id: int, index: int) -> Optional[WorkoutCycleRead]:
        row = await self._get_cycle_row(user_id, cycle_id)
        if row is None:
            return None
        row.current_week_index = index
        row.updated_at = datetime.utcnow()
        await self.commit()
        return await self._to_cycle(row)

    async def delete_cycle(self, user_id: int, cycle_id: int) -> bool:
        row = await self._get_cycle_row(user_id, cycle_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.commit()
        return True
