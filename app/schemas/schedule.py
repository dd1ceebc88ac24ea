from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.enums import DayOfWeek
from app.schemas.dates import to_naive_utc
from app.schemas.playlist import PlaylistRead


def empty_week_schedule() -> Dict[DayOfWeek, Optional[int]]:
    return {day: None for day in DayOfWeek}


class ScheduledWorkoutCreate(BaseModel):
    playlist_id: int
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class ScheduledWorkoutRead(BaseModel):
    id: int
    playlist_id: int
    date: datetime
    completed: bool = False
    completed_at: Optional[datetime] = None
    progress: float = 0

    class Config:
        from_attributes = True

    @field_validator("date", "completed_at")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

class TodaysWorkoutResponse(BaseModel):
    scheduled: Optional[ScheduledWorkoutRead] = None
    playlist: Optional[PlaylistRead] = None


class WeekCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    schedule: Dict[DayOfWeek, Optional[int]] = Field(default_factory=empty_week_schedule)
    start_date: datetime = Field(default_factory=datetime.utcnow)
    end_date: Optional[datetime] = None
    is_template: bool = True

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    @field_validator("schedule")
    @classmethod
    def fill_missing_days(cls, value: Dict[DayOfWeek, Optional[int]]):
        # Ровно одна ссылка (или пусто) на каждый день недели
        schedule = empty_week_schedule()
        schedule.update({day: playlist_id or None for day, playlist_id in value.items()})
        return schedule

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is None:
            self.end_date = self.start_date + timedelta(days=7)
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        return self

class WorkoutWeekRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    schedule: Dict[DayOfWeek, Optional[int]] = Field(default_factory=empty_week_schedule)
    start_date: datetime
    end_date: datetime
    is_template: bool = True

    class Config:
        from_attributes = True

    @property
    def playlist_ids(self) -> List[int]:
        return [playlist_id for playlist_id in self.schedule.values() if playlist_id]

class ApplyWeekRequest(BaseModel):
    week_start: date


class CycleCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    week_ids: List[int] = Field(default_factory=list)
    current_week_index: int = Field(default=0, ge=0)
    auto_rotate: bool = True

    @model_validator(mode="after")
    def check_week_index(self):
        if self.week_ids and self.current_week_index >= len(self.week_ids):
            raise ValueError("current_week_index is out of range")
        if not self.week_ids and self.current_week_index != 0:
            raise ValueError("current_week_index must be 0 for a cycle without weeks")
        return self

class WorkoutCycleRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    weeks: List[WorkoutWeekRead] = Field(default_factory=list)
    current_week_index: int = 0
    auto_rotate: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def current_week(self) -> Optional[WorkoutWeekRead]:
        if not self.weeks:
            return None
        return self.weeks[self.current_week_index]
