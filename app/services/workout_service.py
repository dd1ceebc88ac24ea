import logging
from datetime import date, datetime
from typing import List, Optional

from app.repositories.plan_repository import PlanRepository
from app.repositories.playlist_repository import PlaylistRepository
from app.repositories.progress_repository import ProgressRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.schemas.playlist import PlaylistCreate, PlaylistRead
from app.schemas.progress import WorkoutProgressRead
from app.schemas.schedule import (
    ScheduledWorkoutCreate,
    ScheduledWorkoutRead,
    WeekCreate,
    WorkoutCycleRead,
)
from app.services import playlist_editor, schedule_planner
from app.services.progress_tracker import ProgressTracker

logger = logging.getLogger(__name__)


class WorkoutService:
    """
    Сценарии, которые пишут сразу в несколько коллекций.

    Записи не транзакционны: каждая фиксируется отдельно. Плейлист
    считается источником истины, прогресс запланированной тренировки и
    общий агрегат выводятся из него, поэтому повтор того же вызова
    после сбоя приводит данные в согласованное состояние.
    """

    def __init__(
            self,
            playlists: PlaylistRepository,
            schedule: ScheduleRepository,
            progress: ProgressRepository,
            plans: PlanRepository
    ):
        self.playlists = playlists
        self.schedule = schedule
        self.progress = progress
        self.plans = plans

    async def complete_set(
            self,
            user_id: int,
            scheduled_id: int,
            exercise_id: str,
            set_id: str,
            now: Optional[datetime] = None
    ) -> Optional[ScheduledWorkoutRead]:
        """
        Отметить подход выполненным и пересчитать прогресс.

        Три последовательные записи: плейлист, запланированная тренировка,
        общий агрегат прогресса. Если что-то не найдено, ничего не пишется
        и возвращается None.
        """
        now = now or datetime.utcnow()

        scheduled = await self.schedule.get(user_id, scheduled_id)
        if scheduled is None:
            logger.info(f"complete_set: запланированная тренировка {scheduled_id} не найдена")
            return None

        playlist = await self.playlists.get(user_id, scheduled.playlist_id)
        if playlist is None:
            logger.info(f"complete_set: плейлист {scheduled.playlist_id} не найден")
            return None

        updated_playlist = playlist_editor.complete_set(playlist, exercise_id, set_id, now)
        if updated_playlist is None:
            logger.info(f"complete_set: подход {exercise_id}/{set_id} не найден в плейлисте {playlist.id}")
            return None

        await self.playlists.update(user_id, updated_playlist)

        updated_scheduled = ProgressTracker.apply_completion(scheduled, updated_playlist, now)
        await self.schedule.update(user_id, updated_scheduled)

        await self.refresh_progress(user_id, now)
        return updated_scheduled

    async def refresh_progress(self, user_id: int, now: Optional[datetime] = None) -> WorkoutProgressRead:
        """Пересчитать агрегат прогресса по всем запланированным тренировкам"""
        scheduled = await self.schedule.list_for_user(user_id)
        summary = ProgressTracker.summarize(scheduled, now)
        return await self.progress.save(user_id, summary)

    async def todays_workout(self, user_id: int, today: Optional[date] = None):
        today = today or datetime.utcnow().date()
        scheduled = await self.schedule.list_for_user(user_id)
        todays = ProgressTracker.todays_scheduled_workout(scheduled, today)
        if todays is None:
            return None, None
        playlist = await self.playlists.get(user_id, todays.playlist_id)
        return todays, playlist

    async def create_playlist(self, user_id: int, data: PlaylistCreate) -> PlaylistRead:
        """Создать плейлист; с выбранным днём сразу создаётся недельный шаблон"""
        playlist = await self.playlists.create(
            user_id,
            name=data.name,
            description=data.description,
            exercises=playlist_editor.prepare_exercises(data.exercises),
        )
        if data.schedule_day is not None:
            await self.plans.create_week(
                user_id,
                WeekCreate(
                    name=f"{data.name} Week",
                    schedule=schedule_planner.single_day_schedule(data.schedule_day, playlist.id),
                    is_template=True,
                )
            )
        return playlist

    async def apply_week(self, user_id: int, week_id: int, week_start: date) -> Optional[List[ScheduledWorkoutRead]]:
        """Запланировать плейлисты недельного шаблона на конкретную неделю"""
        week = await self.plans.get_week(user_id, week_id)
        if week is None:
            return None

        items = []
        for scheduled_date, playlist_id in schedule_planner.plan_week(week, week_start):
            if await self.playlists.get(user_id, playlist_id) is None:
                logger.warning(f"apply_week: плейлист {playlist_id} из недели {week_id} не найден, пропускаем")
                continue
            items.append(ScheduledWorkoutCreate(playlist_id=playlist_id, date=scheduled_date))

        if not items:
            return []
        return await self.schedule.create_many(user_id, items)

    async def advance_cycle(self, user_id: int, cycle_id: int) -> Optional[WorkoutCycleRead]:
        cycle = await self.plans.get_cycle(user_id, cycle_id)
        if cycle is None:
            return None
        advanced = schedule_planner.advance_cycle(cycle)
        return await self.plans.set_week_index(user_id, cycle_id, advanced.current_week_index)
