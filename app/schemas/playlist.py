import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.enums import DayOfWeek, MuscleGroup


def new_item_id() -> str:
    return uuid.uuid4().hex


class WorkoutSet(BaseModel):
    id: str = Field(default_factory=new_item_id)
    weight: float = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    is_bodyweight: bool = False
    completed: bool = False
    completed_at: Optional[datetime] = None

class PlaylistExercise(BaseModel):
    id: str = Field(default_factory=new_item_id)
    name: str
    muscle_group: MuscleGroup
    color: Optional[str] = None
    notes: Optional[str] = None
    sets: List[WorkoutSet] = Field(default_factory=list)

class PlaylistCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    exercises: List[PlaylistExercise] = Field(min_length=1)
    # Если указан день, создаётся недельный шаблон с этим плейлистом
    schedule_day: Optional[DayOfWeek] = None

class PlaylistUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    exercises: Optional[List[PlaylistExercise]] = None

class PlaylistRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    exercises: List[PlaylistExercise] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class SetCountUpdate(BaseModel):
    count: int = Field(ge=1, le=6)

class MoveDirection(str, Enum):
    up = "up"
    down = "down"

class MoveExerciseRequest(BaseModel):
    direction: MoveDirection

class SetEdit(BaseModel):
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
