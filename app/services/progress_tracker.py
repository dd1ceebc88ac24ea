from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from app.models.enums import FitnessLevel, MuscleGroup
from app.schemas.playlist import PlaylistExercise, PlaylistRead
from app.schemas.progress import MuscleGroupProgress, ProgressResult, WorkoutProgressRead
from app.schemas.schedule import ScheduledWorkoutRead
from app.schemas.workout import WorkoutRead


class ProgressTracker:
    """
    Расчёт прогресса без состояния и без I/O.

    Все методы получают данные целиком (журнал тренировок, плейлист,
    расписание) и ничего в них не меняют.
    """

    WINDOW = timedelta(days=7)

    # Оптимальное число подходов в неделю по уровню подготовки
    OPTIMAL_SETS_PER_WEEK: Dict[FitnessLevel, Dict[MuscleGroup, int]] = {
        FitnessLevel.BEGINNER: {
            MuscleGroup.ABS: 10,
            MuscleGroup.BACK: 10,
            MuscleGroup.BICEPS: 6,
            MuscleGroup.CALVES: 10,
            MuscleGroup.CHEST: 10,
            MuscleGroup.FOREARMS: 6,
            MuscleGroup.GLUTES: 10,
            MuscleGroup.HAMSTRINGS: 10,
            MuscleGroup.NECK: 6,
            MuscleGroup.QUADS: 10,
            MuscleGroup.SHOULDERS: 10,
            MuscleGroup.TRICEPS: 6,
            MuscleGroup.UPPER_TRAPS: 6,
        },
        FitnessLevel.INTERMEDIATE: {
            MuscleGroup.ABS: 10,
            MuscleGroup.BACK: 20,
            MuscleGroup.BICEPS: 10,
            MuscleGroup.CALVES: 10,
            MuscleGroup.CHEST: 15,
            MuscleGroup.FOREARMS: 8,
            MuscleGroup.GLUTES: 20,
            MuscleGroup.HAMSTRINGS: 12,
            MuscleGroup.NECK: 10,
            MuscleGroup.QUADS: 15,
            MuscleGroup.SHOULDERS: 20,
            MuscleGroup.TRICEPS: 10,
            MuscleGroup.UPPER_TRAPS: 10,
        },
        FitnessLevel.ADVANCED: {
            MuscleGroup.ABS: 15,
            MuscleGroup.BACK: 30,
            MuscleGroup.BICEPS: 20,
            MuscleGroup.CALVES: 15,
            MuscleGroup.CHEST: 20,
            MuscleGroup.FOREARMS: 10,
            MuscleGroup.GLUTES: 30,
            MuscleGroup.HAMSTRINGS: 15,
            MuscleGroup.NECK: 10,
            MuscleGroup.QUADS: 20,
            MuscleGroup.SHOULDERS: 25,
            MuscleGroup.TRICEPS: 20,
            MuscleGroup.UPPER_TRAPS: 10,
        },
    }

    @staticmethod
    def _percentage(part: float, whole: float) -> float:
        if whole <= 0:
            return 0.0
        return part * 100 / whole

    @classmethod
    def get_target(cls, muscle_group: MuscleGroup, fitness_level: Optional[FitnessLevel]) -> int:
        targets = cls.OPTIMAL_SETS_PER_WEEK.get(fitness_level, cls.OPTIMAL_SETS_PER_WEEK[FitnessLevel.BEGINNER])
        return targets[muscle_group]

    @classmethod
    def weekly_sets(
            cls,
            workouts: Iterable[WorkoutRead],
            muscle_group: MuscleGroup,
            now: datetime
    ) -> int:
        window_start = now - cls.WINDOW
        return sum(
            entry.set_count
            for workout in workouts
            if workout.date >= window_start
            for entry in workout.exercises
            if entry.muscle_group == muscle_group
        )

    @classmethod
    def weekly_progress(
            cls,
            workouts: Sequence[WorkoutRead],
            muscle_group: MuscleGroup,
            fitness_level: Optional[FitnessLevel],
            now: Optional[datetime] = None
    ) -> ProgressResult:
        """
        Подходы на группу мышц за скользящие 7x24 часа против цели уровня.

        Окно отсчитывается от now (по умолчанию текущее UTC-время вызова),
        а не от начала календарной недели. Без уровня цель берётся из строки
        Beginner. Процент не ограничивается сверху.
        """
        now = now or datetime.utcnow()
        current = cls.weekly_sets(workouts, muscle_group, now)
        target = cls.get_target(muscle_group, fitness_level)
        return ProgressResult(
            current=current,
            target=target,
            percentage=cls._percentage(current, target)
        )

    @classmethod
    def weekly_progress_all(
            cls,
            workouts: Sequence[WorkoutRead],
            fitness_level: Optional[FitnessLevel],
            now: Optional[datetime] = None
    ) -> List[MuscleGroupProgress]:
        now = now or datetime.utcnow()
        return [
            MuscleGroupProgress(
                muscle_group=group,
                label=group.label,
                **cls.weekly_progress(workouts, group, fitness_level, now).model_dump()
            )
            for group in MuscleGroup
        ]

    @classmethod
    def exercise_completion(cls, exercise: PlaylistExercise) -> float:
        completed = sum(1 for workout_set in exercise.sets if workout_set.completed)
        return cls._percentage(completed, len(exercise.sets))

    @classmethod
    def count_sets(cls, playlist: PlaylistRead) -> tuple:
        """(выполнено, всего) по всем упражнениям плейлиста"""
        total = sum(len(exercise.sets) for exercise in playlist.exercises)
        completed = sum(
            1
            for exercise in playlist.exercises
            for workout_set in exercise.sets
            if workout_set.completed
        )
        return completed, total

    @classmethod
    def workout_completion(cls, playlist: PlaylistRead) -> float:
        completed, total = cls.count_sets(playlist)
        return cls._percentage(completed, total)

    @classmethod
    def is_playlist_complete(cls, playlist: PlaylistRead) -> bool:
        completed, total = cls.count_sets(playlist)
        return total > 0 and completed == total

    @classmethod
    def apply_completion(
            cls,
            scheduled: ScheduledWorkoutRead,
            playlist: PlaylistRead,
            now: Optional[datetime] = None
    ) -> ScheduledWorkoutRead:
        """
        Новая копия запланированной тренировки с прогрессом, пересчитанным по плейлисту.

        completed становится True только при 100% выполненных подходов,
        completed_at ставится в момент перехода в это состояние.
        """
        now = now or datetime.utcnow()
        complete = cls.is_playlist_complete(playlist)
        completed_at = scheduled.completed_at
        if complete and not scheduled.completed:
            completed_at = now
        elif not complete:
            completed_at = None
        return scheduled.model_copy(update={
            "progress": cls.workout_completion(playlist),
            "completed": complete,
            "completed_at": completed_at,
        })

    @classmethod
    def todays_scheduled_workout(
            cls,
            scheduled_workouts: Sequence[ScheduledWorkoutRead],
            today: date
    ) -> Optional[ScheduledWorkoutRead]:
        """Первая по входному порядку невыполненная тренировка на календарный день today."""
        if isinstance(today, datetime):
            today = today.date()
        for scheduled in scheduled_workouts:
            if scheduled.date.date() == today and not scheduled.completed:
                return scheduled
        return None

    @staticmethod
    def _week_start(day: date) -> date:
        return day - timedelta(days=day.weekday())

    @classmethod
    def calculate_streak(cls, scheduled_workouts: Sequence[ScheduledWorkoutRead], today: date) -> int:
        """Число недель подряд (до текущей включительно) с хотя бы одной выполненной тренировкой"""
        if isinstance(today, datetime):
            today = today.date()
        week_starts = {
            cls._week_start((scheduled.completed_at or scheduled.date).date())
            for scheduled in scheduled_workouts
            if scheduled.completed
        }
        if not week_starts:
            return 0

        week = cls._week_start(today)
        # Текущая неделя ещё может быть впереди, стрик не обрывается
        if week not in week_starts:
            week -= timedelta(weeks=1)

        streak = 0
        while week in week_starts:
            streak += 1
            week -= timedelta(weeks=1)
        return streak

    @classmethod
    def summarize(
            cls,
            scheduled_workouts: Sequence[ScheduledWorkoutRead],
            now: Optional[datetime] = None
    ) -> WorkoutProgressRead:
        now = now or datetime.utcnow()
        completed = [scheduled for scheduled in scheduled_workouts if scheduled.completed]
        last_workout = max(
            (scheduled.completed_at or scheduled.date for scheduled in completed),
            default=None
        )
        return WorkoutProgressRead(
            total_workouts=len(scheduled_workouts),
            completed_workouts=len(completed),
            streak=cls.calculate_streak(scheduled_workouts, now.date()),
            last_workout=last_workout
        )
