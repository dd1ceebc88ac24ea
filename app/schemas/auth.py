from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from app.models.enums import FitnessLevel, FitnessGoal

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str
    fitness_level: Optional[FitnessLevel] = None
    fitness_goal: Optional[FitnessGoal] = None
    weight: Optional[float] = None
    height: Optional[int] = None

class AuthResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str

class RefreshTokenRequest(BaseModel):
    refresh_token: str
