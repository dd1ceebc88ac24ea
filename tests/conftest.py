"""
Общие фикстуры для всех тестов TrAi Tracker.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- Все репозитории заменяются на AsyncMock(spec=...) через dependency_overrides.
- get_current_user в user_client заменяется на лямбду с нужным пользователем;
  в client он работает по-настоящему, через JWT и mock_repo.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator

from app.api.router import api_router
from app.core.db import get_db
from app.core.dependencies import (
    get_current_user,
    get_plan_repository,
    get_playlist_repository,
    get_progress_repository,
    get_schedule_repository,
    get_user_repository,
    get_workout_repository,
)
from app.core.exceptions import register_exception_handlers
from app.models.enums import FitnessLevel
from app.models.user import User
from app.repositories.plan_repository import PlanRepository
from app.repositories.playlist_repository import PlaylistRepository
from app.repositories.progress_repository import ProgressRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="TrAi Tracker Test App")
    test_app.include_router(api_router, prefix="/api/v1")
    register_exception_handlers(test_app)
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {access_token}"}


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Пользователь уровня Beginner."""
    return User(
        id=1,
        email="test@example.com",
        name="Tester",
        password=auth_service.hash_password("password123"),
        fitness_level=FitnessLevel.BEGINNER,
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def advanced_user_fixture() -> User:
    return User(
        id=2,
        email="advanced@example.com",
        name="Advanced",
        password=auth_service.hash_password("advanced123"),
        fitness_level=FitnessLevel.ADVANCED,
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры репозиториев
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_workouts() -> AsyncMock:
    repo = AsyncMock(spec=WorkoutRepository)
    repo.list_for_user.return_value = []
    return repo


@pytest.fixture
def mock_playlists() -> AsyncMock:
    repo = AsyncMock(spec=PlaylistRepository)
    repo.list_for_user.return_value = []
    return repo


@pytest.fixture
def mock_schedule() -> AsyncMock:
    repo = AsyncMock(spec=ScheduleRepository)
    repo.list_for_user.return_value = []
    return repo


@pytest.fixture
def mock_plans() -> AsyncMock:
    repo = AsyncMock(spec=PlanRepository)
    repo.get_weeks.return_value = []
    return repo


@pytest.fixture
def mock_progress() -> AsyncMock:
    repo = AsyncMock(spec=ProgressRepository)
    repo.get.return_value = None
    return repo


def _override_repositories(app: FastAPI, mock_repo, mock_workouts, mock_playlists,
                           mock_schedule, mock_plans, mock_progress) -> None:
    app.dependency_overrides[get_db] = lambda: AsyncMock()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_workout_repository] = lambda: mock_workouts
    app.dependency_overrides[get_playlist_repository] = lambda: mock_playlists
    app.dependency_overrides[get_schedule_repository] = lambda: mock_schedule
    app.dependency_overrides[get_plan_repository] = lambda: mock_plans
    app.dependency_overrides[get_progress_repository] = lambda: mock_progress


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo, mock_workouts, mock_playlists, mock_schedule,
                 mock_plans, mock_progress) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент без подмены пользователя.
    Используется для auth-эндпоинтов и проверки 401/403 без токена.
    """
    app = create_test_app()
    _override_repositories(app, mock_repo, mock_workouts, mock_playlists,
                           mock_schedule, mock_plans, mock_progress)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_repo, mock_workouts, mock_playlists, mock_schedule,
                      mock_plans, mock_progress) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как user_fixture.
    get_current_user → user_fixture, репозитории → моки.
    """
    app = create_test_app()
    _override_repositories(app, mock_repo, mock_workouts, mock_playlists,
                           mock_schedule, mock_plans, mock_progress)
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
