"""
Изменения плейлиста: число подходов, порядок упражнений, правка и отметка подходов.

Каждая функция возвращает новую копию плейлиста и не трогает исходный
объект; None означает, что упражнение или подход не найдены.
"""
from datetime import datetime
from typing import List, Optional

from app.schemas.playlist import (
    MoveDirection,
    PlaylistExercise,
    PlaylistRead,
    WorkoutSet,
)

DEFAULT_SET_COUNT = 3


def _find_exercise(playlist: PlaylistRead, exercise_id: str) -> Optional[int]:
    for index, exercise in enumerate(playlist.exercises):
        if exercise.id == exercise_id:
            return index
    return None


def _replace_exercise(playlist: PlaylistRead, index: int, exercise: PlaylistExercise) -> PlaylistRead:
    exercises = [item.model_copy(deep=True) for item in playlist.exercises]
    exercises[index] = exercise
    return playlist.model_copy(update={"exercises": exercises})


def with_default_sets(exercise: PlaylistExercise, count: int = DEFAULT_SET_COUNT) -> PlaylistExercise:
    """Новое упражнение без подходов получает count пустых подходов."""
    if exercise.sets:
        return exercise.model_copy(deep=True)
    return exercise.model_copy(update={"sets": [WorkoutSet() for _ in range(count)]})


def prepare_exercises(exercises: List[PlaylistExercise]) -> List[PlaylistExercise]:
    return [with_default_sets(exercise) for exercise in exercises]


def resize_sets(sets: List[WorkoutSet], count: int) -> List[WorkoutSet]:
    """Обрезать или дополнить список подходов; новые копируют вес/повторы первого."""
    if count <= len(sets):
        return [workout_set.model_copy() for workout_set in sets[:count]]

    template = sets[0] if sets else WorkoutSet()
    additional = [
        WorkoutSet(
            weight=template.weight,
            reps=template.reps,
            is_bodyweight=template.is_bodyweight,
        )
        for _ in range(count - len(sets))
    ]
    return [workout_set.model_copy() for workout_set in sets] + additional


def update_set_count(playlist: PlaylistRead, exercise_id: str, count: int) -> Optional[PlaylistRead]:
    index = _find_exercise(playlist, exercise_id)
    if index is None:
        return None
    exercise = playlist.exercises[index]
    return _replace_exercise(
        playlist, index, exercise.model_copy(update={"sets": resize_sets(exercise.sets, count)})
    )


def move_exercise(playlist: PlaylistRead, exercise_id: str, direction: MoveDirection) -> Optional[PlaylistRead]:
    index = _find_exercise(playlist, exercise_id)
    if index is None:
        return None

    exercises = [item.model_copy(deep=True) for item in playlist.exercises]
    target = index - 1 if direction == MoveDirection.up else index + 1
    # На краях списка порядок не меняется
    if 0 <= target < len(exercises):
        exercises[index], exercises[target] = exercises[target], exercises[index]
    return playlist.model_copy(update={"exercises": exercises})


def remove_exercise(playlist: PlaylistRead, exercise_id: str) -> Optional[PlaylistRead]:
    if _find_exercise(playlist, exercise_id) is None:
        return None
    exercises = [
        item.model_copy(deep=True) for item in playlist.exercises if item.id != exercise_id
    ]
    return playlist.model_copy(update={"exercises": exercises})


def _update_set(
        playlist: PlaylistRead,
        exercise_id: str,
        set_id: str,
        changes: dict
) -> Optional[PlaylistRead]:
    index = _find_exercise(playlist, exercise_id)
    if index is None:
        return None
    exercise = playlist.exercises[index]
    if not any(workout_set.id == set_id for workout_set in exercise.sets):
        return None

    sets = [
        workout_set.model_copy(update=changes) if workout_set.id == set_id else workout_set.model_copy()
        for workout_set in exercise.sets
    ]
    return _replace_exercise(playlist, index, exercise.model_copy(update={"sets": sets}))


def find_set(playlist: PlaylistRead, exercise_id: str, set_id: str) -> Optional[WorkoutSet]:
    index = _find_exercise(playlist, exercise_id)
    if index is None:
        return None
    for workout_set in playlist.exercises[index].sets:
        if workout_set.id == set_id:
            return workout_set
    return None


def edit_set(
        playlist: PlaylistRead,
        exercise_id: str,
        set_id: str,
        weight: Optional[float] = None,
        reps: Optional[int] = None
) -> Optional[PlaylistRead]:
    workout_set = find_set(playlist, exercise_id, set_id)
    if workout_set is None:
        return None
    if workout_set.completed:
        raise ValueError("Completed sets cannot be edited")

    changes = {}
    if weight is not None:
        changes["weight"] = weight
    if reps is not None:
        changes["reps"] = reps
    return _update_set(playlist, exercise_id, set_id, changes)


def complete_set(
        playlist: PlaylistRead,
        exercise_id: str,
        set_id: str,
        now: Optional[datetime] = None
) -> Optional[PlaylistRead]:
    workout_set = find_set(playlist, exercise_id, set_id)
    if workout_set is None:
        return None
    if workout_set.completed:
        return playlist.model_copy(deep=True)
    return _update_set(
        playlist,
        exercise_id,
        set_id,
        {"completed": True, "completed_at": now or datetime.utcnow()},
    )
