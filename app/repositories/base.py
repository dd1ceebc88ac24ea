import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class BaseRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def commit(self) -> None:
        """Зафиксировать изменения; при ошибке откатить сессию и поднять StoreError."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Ошибка записи в БД ({type(self).__name__}): {e}")
            raise StoreError(str(e)) from e
