from datetime import datetime
from typing import Optional

from sqlalchemy import select

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        """Получить пользователя по значению refresh-токена (для reuse-detection)."""
        result = await self.db.execute(
            select(User).where(User.refresh_token == refresh_token)
        )
        return result.scalar_one_or_none()

    async def save_refresh_token(
        self,
        user: User,
        refresh_token: str,
        expires: datetime,
    ) -> None:
        user.refresh_token = refresh_token
        user.refresh_token_expires = expires
        await self.commit()

    async def revoke_refresh_token(self, user: User) -> None:
        """Аннулировать refresh-токен пользователя (logout / обнаружение повторного использования)."""
        user.refresh_token = None
        user.refresh_token_expires = None
        await self.commit()

    async def create_user(self, user: User) -> User:
        self.db.add(user)
        await self.commit()
        await self.db.refresh(user)
        return user

    async def update_profile(self, user: User, changes: dict) -> User:
        """Обновить только переданные поля профиля"""
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()
        await self.commit()
        await self.db.refresh(user)
        return user
