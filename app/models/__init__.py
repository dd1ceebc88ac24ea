from app.models.user import User
from app.models.workout import Workout, Exercise
from app.models.playlist import WorkoutPlaylist
from app.models.schedule import ScheduledWorkout, WorkoutWeek, WorkoutCycle
from app.models.progress import WorkoutProgress

__all__ = [
    "User",
    "Workout", "Exercise",
    "WorkoutPlaylist",
    "ScheduledWorkout", "WorkoutWeek", "WorkoutCycle",
    "WorkoutProgress",
]
