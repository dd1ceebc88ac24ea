from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.workout import Workout, Exercise
from app.repositories.base import BaseRepository
from app.schemas.workout import WorkoutCreate, WorkoutRead


class WorkoutRepository(BaseRepository):
    """Журнал выполненных тренировок пользователя."""

    def _query(self, user_id: int):
        return (
            select(Workout)
            .options(selectinload(Workout.exercises))
            .where(Workout.user_id == user_id)
            .execution_options(populate_existing=True)
        )

    async def _get_row(self, user_id: int, workout_id: int) -> Optional[Workout]:
        result = await self.db.execute(self._query(user_id).where(Workout.id == workout_id))
        return result.scalar_one_or_none()

    @staticmethod
    def _build_exercises(data: WorkoutCreate) -> List[Exercise]:
        return [
            Exercise(
                position=position,
                name=entry.name,
                muscle_group=entry.muscle_group,
                set_count=entry.set_count,
            )
            for position, entry in enumerate(data.exercises)
        ]

    async def list_for_user(
            self,
            user_id: int,
            since: Optional[datetime] = None,
            until: Optional[datetime] = None
    ) -> List[WorkoutRead]:
        """Границы периода включаются; без них возвращается весь журнал"""
        query = self._query(user_id)
        if since is not None:
            query = query.where(Workout.date >= since)
        if until is not None:
            query = query.where(Workout.date <= until)
        result = await self.db.execute(query.order_by(Workout.date.desc(), Workout.id.desc()))
        return [WorkoutRead.model_validate(row) for row in result.scalars().all()]

    async def get(self, user_id: int, workout_id: int) -> Optional[WorkoutRead]:
        row = await self._get_row(user_id, workout_id)
        return WorkoutRead.model_validate(row) if row else None

    async def create(self, user_id: int, data: WorkoutCreate) -> WorkoutRead:
        row = Workout(
            user_id=user_id,
            type=data.type,
            date=data.date,
            notes=data.notes,
            duration=data.duration,
            exercises=self._build_exercises(data),
        )
        self.db.add(row)
        await self.commit()
        return await self.get(user_id, row.id)

    async def replace(self, user_id: int, workout_id: int, data: WorkoutCreate) -> Optional[WorkoutRead]:
        """Запись заменяется целиком, включая список упражнений"""
        row = await self._get_row(user_id, workout_id)
        if row is None:
            return None

        row.type = data.type
        row.date = data.date
        row.notes = data.notes
        row.duration = data.duration
        row.exercises = self._build_exercises(data)
        row.updated_at = datetime.utcnow()
        await self.commit()
        return await self.get(user_id, workout_id)

    async def delete(self, user_id: int, workout_id: int) -> bool:
        row = await self._get_row(user_id, workout_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.commit()
        return True
