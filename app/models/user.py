from sqlalchemy import Column, Integer, String, Float, Enum, DateTime
from sqlalchemy.orm import relationship
from app.core.base import Base
from app.models.enums import FitnessLevel, FitnessGoal
from datetime import datetime


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=True)
    weight = Column(Float, nullable=True)
    height = Column(Integer, nullable=True)
    # Без уровня цели считаются по строке Beginner
    fitness_level = Column(Enum(FitnessLevel), nullable=True)
    fitness_goal = Column(Enum(FitnessGoal), nullable=True)
    refresh_token = Column(String, nullable=True, index=True)
    refresh_token_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    workouts = relationship("Workout", back_populates="user", cascade="all, delete")
    playlists = relationship("WorkoutPlaylist", back_populates="user", cascade="all, delete")
    scheduled_workouts = relationship("ScheduledWorkout", back_populates="user", cascade="all, delete")
    progress = relationship("WorkoutProgress", back_populates="user", cascade="all, delete", uselist=False)
