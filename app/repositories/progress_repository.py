from datetime import datetime
from typing import Optional

from sqlalchemy import select

from app.models.progress import WorkoutProgress
from app.repositories.base import BaseRepository
from app.schemas.progress import WorkoutProgressRead


class ProgressRepository(BaseRepository):

    async def _get_row(self, user_id: int) -> Optional[WorkoutProgress]:
        result = await self.db.execute(
            select(WorkoutProgress).where(WorkoutProgress.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get(self, user_id: int) -> Optional[WorkoutProgressRead]:
        row = await self._get_row(user_id)
        return WorkoutProgressRead.model_validate(row) if row else None

    async def save(self, user_id: int, progress: WorkoutProgressRead) -> WorkoutProgressRead:
        row = await self._get_row(user_id)
        if row is None:
            row = WorkoutProgress(user_id=user_id)
            self.db.add(row)

        row.total_workouts = progress.total_workouts
        row.completed_workouts = progress.completed_workouts
        row.streak = progress.streak
        row.last_workout = progress.last_workout
        row.updated_at = datetime.utcnow()
        await self.commit()
        return WorkoutProgressRead.model_validate(row)
