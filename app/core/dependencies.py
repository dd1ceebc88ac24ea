from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.config import settings
from app.models.user import User
from app.repositories.plan_repository import PlanRepository
from app.repositories.playlist_repository import PlaylistRepository
from app.repositories.progress_repository import ProgressRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.workout_service import WorkoutService


security = HTTPBearer()


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Фабрика репозитория, инжектируется в эндпоинты через Depends."""
    return UserRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_playlist_repository(db: AsyncSession = Depends(get_db)) -> PlaylistRepository:
    return PlaylistRepository(db)


def get_schedule_repository(db: AsyncSession = Depends(get_db)) -> ScheduleRepository:
    return ScheduleRepository(db)


def get_plan_repository(db: AsyncSession = Depends(get_db)) -> PlanRepository:
    return PlanRepository(db)


def get_progress_repository(db: AsyncSession = Depends(get_db)) -> ProgressRepository:
    return ProgressRepository(db)


def get_workout_service(
        playlists: PlaylistRepository = Depends(get_playlist_repository),
        schedule: ScheduleRepository = Depends(get_schedule_repository),
        progress: ProgressRepository = Depends(get_progress_repository),
        plans: PlanRepository = Depends(get_plan_repository),
) -> WorkoutService:
    return WorkoutService(playlists, schedule, progress, plans)


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Невалидный токен доступа",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = await repo.get_by_id(int(user_id))
    if user is None:
        raise credentials_exception

    return user
