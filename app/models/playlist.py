from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.core.base import Base


class WorkoutPlaylist(Base):
    """
    Плейлист - именованный шаблон упражнений с подходами.

    Упражнения хранятся одним JSON-документом и перезаписываются целиком
    при каждом изменении (число подходов, порядок, отметки выполнения).
    """
    __tablename__ = "workout_playlists"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    exercises = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="playlists")
