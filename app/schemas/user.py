from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from app.models.enums import FitnessLevel, FitnessGoal

class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[int] = None
    fitness_level: Optional[FitnessLevel] = None
    fitness_goal: Optional[FitnessGoal] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserUpdate(BaseModel):
    name: Optional[str] = None
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    fitness_level: Optional[FitnessLevel] = None
    fitness_goal: Optional[FitnessGoal] = None
