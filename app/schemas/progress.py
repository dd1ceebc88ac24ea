from datetime import datetime
from pydantic import BaseModel
from typing import Optional, List

from app.models.enums import MuscleGroup
from app.schemas.schedule import ScheduledWorkoutRead

class ProgressResult(BaseModel):
    current: int
    target: int
    percentage: float  # без ограничения сверху, 0-100 это забота интерфейса

class MuscleGroupProgress(ProgressResult):
    muscle_group: MuscleGroup
    label: str

class WorkoutProgressRead(BaseModel):
    total_workouts: int = 0
    completed_workouts: int = 0
    streak: int = 0
    last_workout: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProgressSummaryResponse(BaseModel):
    progress: WorkoutProgressRead
    muscle_groups: List[MuscleGroupProgress]
    todays_workout: Optional[ScheduledWorkoutRead] = None
