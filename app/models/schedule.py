from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, Float, JSON
from sqlalchemy.orm import relationship
from app.core.base import Base


class ScheduledWorkout(Base):
    __tablename__ = "scheduled_workouts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Ссылка, а не владение: плейлист может быть запланирован много раз
    playlist_id = Column(Integer, ForeignKey("workout_playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    progress = Column(Float, default=0, nullable=False)

    user = relationship("User", back_populates="scheduled_workouts")


class WorkoutWeek(Base):
    __tablename__ = "workout_weeks"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    schedule = Column(JSON, nullable=False, default=dict)  # {"MONDAY": playlist_id | null, ...}
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_template = Column(Boolean, default=True, nullable=False)


class WorkoutCycle(Base):
    __tablename__ = "workout_cycles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    week_ids = Column(JSON, nullable=False, default=list)
    current_week_index = Column(Integer, default=0, nullable=False)
    auto_rotate = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
