from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, delete

from app.models.playlist import WorkoutPlaylist
from app.models.schedule import ScheduledWorkout
from app.repositories.base import BaseRepository
from app.schemas.playlist import PlaylistExercise, PlaylistRead


def dump_exercises(exercises: List[PlaylistExercise]) -> list:
    return [exercise.model_dump(mode="json") for exercise in exercises]


class PlaylistRepository(BaseRepository):

    async def _get_row(self, user_id: int, playlist_id: int) -> Optional[WorkoutPlaylist]:
        result = await self.db.execute(
            select(WorkoutPlaylist).where(
                WorkoutPlaylist.user_id == user_id,
                WorkoutPlaylist.id == playlist_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> List[PlaylistRead]:
        result = await self.db.execute(
            select(WorkoutPlaylist)
            .where(WorkoutPlaylist.user_id == user_id)
            .order_by(WorkoutPlaylist.id.asc())
        )
        return [PlaylistRead.model_validate(row) for row in result.scalars().all()]

    async def get(self, user_id: int, playlist_id: int) -> Optional[PlaylistRead]:
        row = await self._get_row(user_id, playlist_id)
        return PlaylistRead.model_validate(row) if row else None

    async def create(
            self,
            user_id: int,
            name: str,
            exercises: List[PlaylistExercise],
            description: Optional[str] = None
    ) -> PlaylistRead:
        now = datetime.utcnow()
        row = WorkoutPlaylist(
            user_id=user_id,
            name=name,
            description=description,
            exercises=dump_exercises(exercises),
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        await self.commit()
        return PlaylistRead.model_validate(row)

    async def update(self, user_id: int, playlist: PlaylistRead) -> Optional[PlaylistRead]:
        """Плейлист перезаписывается целиком переданной копией"""
        row = await self._get_row(user_id, playlist.id)
        if row is None:
            return None

        row.name = playlist.name
        row.description = playlist.description
        row.exercises = dump_exercises(playlist.exercises)
        row.updated_at = datetime.utcnow()
        await self.commit()
        return PlaylistRead.model_validate(row)

    async def delete(self, user_id: int, playlist_id: int) -> bool:
        row = await self._get_row(user_id, playlist_id)
        if row is None:
            return False
        # Запланированные экземпляры без плейлиста теряют смысл
        await self.db.execute(
            delete(ScheduledWorkout).where(
                ScheduledWorkout.user_id == user_id,
                ScheduledWorkout.playlist_id == playlist_id
            )
        )
        await self.db.delete(row)
        await self.commit()
        return True
