from typing import List, Optional

from sqlalchemy import select

from app.models.schedule import ScheduledWorkout
from app.repositories.base import BaseRepository
from app.schemas.schedule import ScheduledWorkoutCreate, ScheduledWorkoutRead


class ScheduleRepository(BaseRepository):
    """Запланированные экземпляры плейлистов."""

    async def _get_row(self, user_id: int, scheduled_id: int) -> Optional[ScheduledWorkout]:
        result = await self.db.execute(
            select(ScheduledWorkout).where(
                ScheduledWorkout.user_id == user_id,
                ScheduledWorkout.id == scheduled_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> List[ScheduledWorkoutRead]:
        """Фиксированный порядок: по дате, затем по id"""
        result = await self.db.execute(
            select(ScheduledWorkout)
            .where(ScheduledWorkout.user_id == user_id)
            .order_by(ScheduledWorkout.date.asc(), ScheduledWorkout.id.asc())
        )
        return [ScheduledWorkoutRead.model_validate(row) for row in result.scalars().all()]

    async def get(self, user_id: int, scheduled_id: int) -> Optional[ScheduledWorkoutRead]:
        row = await self._get_row(user_id, scheduled_id)
        return ScheduledWorkoutRead.model_validate(row) if row else None

    async def create_many(self, user_id: int, items: List[ScheduledWorkoutCreate]) -> List[ScheduledWorkoutRead]:
        rows = [
            ScheduledWorkout(
                user_id=user_id,
                playlist_id=item.playlist_id,
                date=item.date,
                completed=False,
                progress=0,
            )
            for item in items
        ]
        self.db.add_all(rows)
        await self.commit()
        return [ScheduledWorkoutRead.model_validate(row) for row in rows]

    async def create(self, user_id: int, item: ScheduledWorkoutCreate) -> ScheduledWorkoutRead:
        created = await self.create_many(user_id, [item])
        return created[0]

    async def update(self, user_id: int, scheduled: ScheduledWorkoutRead) -> Optional[ScheduledWorkoutRead]:
        row = await self._get_row(user_id, scheduled.id)
        if row is None:
            return None

        row.date = scheduled.date
        row.completed = scheduled.completed
        row.completed_at = scheduled.completed_at
        row.progress = scheduled.progress
        await self.commit()
        return ScheduledWorkoutRead.model_validate(row)

    async def delete(self, user_id: int, scheduled_id: int) -> bool:
        row = await self._get_row(user_id, scheduled_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.commit()
        return True
