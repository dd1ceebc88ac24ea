from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.models.enums import MuscleGroup
from app.schemas.dates import to_naive_utc

class ExerciseEntry(BaseModel):
    name: Optional[str] = None
    muscle_group: MuscleGroup
    set_count: int = Field(default=0, ge=0)

    class Config:
        from_attributes = True

class WorkoutCreate(BaseModel):
    type: str = "Strength"
    date: datetime
    notes: Optional[str] = None
    duration: int = Field(default=0, ge=0)
    exercises: List[ExerciseEntry] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class WorkoutRead(WorkoutCreate):
    """Запись журнала в том виде, в каком её видит трекер прогресса."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
