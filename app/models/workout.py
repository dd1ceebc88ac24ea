from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.core.base import Base
from app.models.enums import MuscleGroup


class Workout(Base):
    """Запись журнала: тренировка, которая уже состоялась."""
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String, nullable=False, default="Strength")
    date = Column(DateTime, nullable=False, index=True)
    notes = Column(String, nullable=True)
    duration = Column(Integer, default=0, nullable=False)  # минуты
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="workouts")
    exercises = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.position",
    )

class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True)
    workout_id = Column(Integer, ForeignKey("workouts.id"), nullable=False, index=True)
    position = Column(Integer, default=0, nullable=False)
    name = Column(String, nullable=True)
    muscle_group = Column(Enum(MuscleGroup), nullable=False)
    set_count = Column(Integer, default=0, nullable=False)

    workout = relationship("Workout", back_populates="exercises")
