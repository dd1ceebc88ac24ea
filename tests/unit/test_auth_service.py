"""
Модульные тесты для AuthService.

Покрываемые методы:
- hash_password / verify_password
- create_access_token / create_refresh_token
- issue_tokens
- authenticate_user
- register_user
- rotate_refresh_token (включая обнаружение повторного использования)
- logout_user
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from jose import jwt
from fastapi import HTTPException

from app.services.auth_service import auth_service
from app.core.config import settings
from app.models.enums import FitnessLevel
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister

pytestmark = pytest.mark.unit


def make_user(user_id: int = 1, email: str = "u@test.com", password: str = "h", **extra) -> User:
    return User(id=user_id, email=email, name="u", password=password, **extra)


# ---------------------------------------------------------------------------
# hash_password / verify_password
# ---------------------------------------------------------------------------

def test_hash_password_creates_valid_bcrypt_hash():
    """hash_password должен возвращать непустую строку, начинающуюся с $2b$."""
    hashed = auth_service.hash_password("secret")
    assert isinstance(hashed, str)
    assert hashed.startswith("$2b$")


def test_hash_password_produces_unique_salts():
    """Два хэша одного пароля должны отличаться (уникальные соли bcrypt)."""
    h1 = auth_service.hash_password("same_password")
    h2 = auth_service.hash_password("same_password")
    assert h1 != h2


def test_verify_password_valid_credentials():
    plain = "my_password"
    hashed = auth_service.hash_password(plain)
    assert auth_service.verify_password(plain, hashed) is True


def test_verify_password_wrong_password_returns_false():
    hashed = auth_service.hash_password("correct_password")
    assert auth_service.verify_password("wrong_password", hashed) is False


def test_verify_password_empty_or_broken_hash_returns_false():
    """verify_password возвращает False, если хэш пустой, None или не bcrypt."""
    assert auth_service.verify_password("password", "") is False
    assert auth_service.verify_password("password", None) is False
    assert auth_service.verify_password("password", "plain-text") is False


# ---------------------------------------------------------------------------
# create_access_token / create_refresh_token
# ---------------------------------------------------------------------------

def test_create_access_token_contains_sub():
    token = auth_service.create_access_token(data={"sub": "42"})
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "42"


def test_create_access_token_expires_within_expected_delta():
    """Access-токен должен истекать не позже чем через ACCESS_TOKEN_EXPIRE_MINUTES + 1 мин."""
    token = auth_service.create_access_token(data={"sub": "1"})
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    exp = datetime.utcfromtimestamp(payload["exp"])
    max_exp = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES + 1)
    assert exp <= max_exp


def test_create_refresh_token_is_valid_jwt():
    """Refresh-токен должен быть валидным JWT, подписанным REFRESH_SECRET_KEY."""
    token = auth_service.create_refresh_token(data={"sub": "7"})
    payload = jwt.decode(token, settings.REFRESH_SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "7"
    assert payload["jti"]


def test_refresh_tokens_are_unique():
    """Два refresh-токена, выданных подряд, не совпадают."""
    first = auth_service.create_refresh_token(data={"sub": "7"})
    second = auth_service.create_refresh_token(data={"sub": "7"})
    assert first != second


# ---------------------------------------------------------------------------
# issue_tokens
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_issue_tokens_saves_refresh_token():
    user = make_user(user_id=3)
    repo = AsyncMock(spec=UserRepository)

    access_token, refresh_token = await auth_service.issue_tokens(repo, user)

    payload = jwt.decode(access_token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "3"
    saved_user, saved_token, expires = repo.save_refresh_token.await_args.args
    assert saved_user is user
    assert saved_token == refresh_token
    assert expires > datetime.utcnow()


# ---------------------------------------------------------------------------
# authenticate_user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_authenticate_user_success():
    plain_password = "pass123"
    user = make_user(password=auth_service.hash_password(plain_password))
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = user

    result = await auth_service.authenticate_user(
        repo, UserLogin(email="u@test.com", password=plain_password)
    )
    assert result == user


@pytest.mark.asyncio
async def test_authenticate_user_user_not_found_returns_none():
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = None

    result = await auth_service.authenticate_user(
        repo, UserLogin(email="unknown@test.com", password="any")
    )
    assert result is None


@pytest.mark.asyncio
async def test_authenticate_user_wrong_password_returns_none():
    user = make_user(password=auth_service.hash_password("correct"))
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = user

    result = await auth_service.authenticate_user(
        repo, UserLogin(email="u@test.com", password="wrong")
    )
    assert result is None


# ---------------------------------------------------------------------------
# register_user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_user_existing_email_raises_400():
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = make_user(email="exists@test.com")

    with pytest.raises(HTTPException) as exc_info:
        await auth_service.register_user(
            repo, UserRegister(name="new", email="exists@test.com", password="pass123")
        )
    assert exc_info.value.status_code == 400
    repo.create_user.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_user_creates_new_user_with_level():
    """register_user хэширует пароль и сохраняет уровень подготовки."""
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = None
    repo.create_user.side_effect = lambda user: user

    result = await auth_service.register_user(
        repo,
        UserRegister(
            name="newbie",
            email="new@test.com",
            password="password123",
            fitness_level=FitnessLevel.INTERMEDIATE,
        )
    )
    assert result.email == "new@test.com"
    assert result.fitness_level == FitnessLevel.INTERMEDIATE
    assert result.password != "password123"
    assert auth_service.verify_password("password123", result.password)


# ---------------------------------------------------------------------------
# rotate_refresh_token
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_rotate_refresh_token_success():
    presented_token = auth_service.create_refresh_token(data={"sub": "1"})
    user = make_user(
        refresh_token=presented_token,
        refresh_token_expires=datetime.utcnow() + timedelta(days=1),
    )
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_refresh_token.return_value = user

    assert await auth_service.rotate_refresh_token(repo, presented_token) is user


@pytest.mark.asyncio
async def test_rotate_refresh_token_reuse_detection_revokes_all_tokens():
    """
    Если JWT валиден, но токена нет в БД → обнаружение повторного использования.
    Должен быть вызван revoke_refresh_token для пострадавшего пользователя.
    """
    victim = make_user(user_id=5, email="victim@test.com")
    presented_token = auth_service.create_refresh_token(data={"sub": "5"})

    repo = AsyncMock(spec=UserRepository)
    # Токен подписан верно, но в БД не найден (уже использован)
    repo.get_by_refresh_token.return_value = None
    repo.get_by_id.return_value = victim

    result = await auth_service.rotate_refresh_token(repo, presented_token)

    assert result is None
    repo.revoke_refresh_token.assert_called_once_with(victim)


@pytest.mark.asyncio
async def test_rotate_refresh_token_expired_db_record_returns_none():
    presented_token = auth_service.create_refresh_token(data={"sub": "1"})
    user = make_user(
        refresh_token=presented_token,
        refresh_token_expires=datetime.utcnow() - timedelta(days=1),  # истёк
    )
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_refresh_token.return_value = user

    assert await auth_service.rotate_refresh_token(repo, presented_token) is None


@pytest.mark.asyncio
async def test_rotate_refresh_token_invalid_jwt_returns_none():
    repo = AsyncMock(spec=UserRepository)
    result = await auth_service.rotate_refresh_token(repo, "invalid.token.value")
    assert result is None
    repo.get_by_refresh_token.assert_not_awaited()


# ---------------------------------------------------------------------------
# logout_user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_logout_user_revokes_refresh_token():
    user = make_user()
    token = auth_service.create_refresh_token(data={"sub": "1"})

    repo = AsyncMock(spec=UserRepository)
    repo.get_by_id.return_value = user

    result = await auth_service.logout_user(repo, token)

    assert result is True
    repo.revoke_refresh_token.assert_called_once_with(user)


@pytest.mark.asyncio
async def test_logout_user_invalid_token_returns_false():
    repo = AsyncMock(spec=UserRepository)
    result = await auth_service.logout_user(repo, "bad.token")
    assert result is False
