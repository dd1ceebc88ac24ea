from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base

class WorkoutProgress(Base):
    """Агрегат по запланированным тренировкам; всегда пересчитывается из них."""
    __tablename__ = "workout_progress"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    total_workouts = Column(Integer, default=0, nullable=False)
    completed_workouts = Column(Integer, default=0, nullable=False)
    streak = Column(Integer, default=0, nullable=False)  # недели подряд с тренировками
    last_workout = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="progress")
