import logging

from app.core.base import Base
from app.core.config import settings
from app.core.db import engine

# Импортируем ВСЕ модели, чтобы они попали в metadata
from app.models.user import User
from app.models.workout import Workout, Exercise
from app.models.playlist import WorkoutPlaylist
from app.models.schedule import ScheduledWorkout, WorkoutWeek, WorkoutCycle
from app.models.progress import WorkoutProgress

logger = logging.getLogger(__name__)


async def init_database():
    """Инициализация базы данных"""
    async with engine.begin() as conn:
        # Удаляем все таблицы если RESET_DATABASE=true
        if settings.RESET_DATABASE:
            logger.warning("🧹 RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)

        # Создаем все таблицы
        await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Таблицы БД созданы/проверены")
