"""
Модульные тесты для playlist_editor.

Все функции возвращают новую копию плейлиста; исходный объект
после вызова должен оставаться прежним.
"""

import pytest
from datetime import datetime

from app.models.enums import MuscleGroup
from app.schemas.playlist import MoveDirection, PlaylistExercise, PlaylistRead, WorkoutSet
from app.services import playlist_editor

pytestmark = pytest.mark.unit

NOW = datetime(2024, 5, 15, 18, 30)


@pytest.fixture
def playlist() -> PlaylistRead:
    return PlaylistRead(
        id=10,
        name="Push Day",
        exercises=[
            PlaylistExercise(
                id="bench",
                name="Bench Press",
                muscle_group=MuscleGroup.CHEST,
                sets=[
                    WorkoutSet(id="b1", weight=60, reps=8),
                    WorkoutSet(id="b2", weight=60, reps=8, completed=True, completed_at=NOW),
                ],
            ),
            PlaylistExercise(
                id="ohp",
                name="Overhead Press",
                muscle_group=MuscleGroup.SHOULDERS,
                sets=[WorkoutSet(id="o1", weight=40, reps=10)],
            ),
            PlaylistExercise(
                id="dips",
                name="Dips",
                muscle_group=MuscleGroup.TRICEPS,
                sets=[WorkoutSet(id="d1", reps=12, is_bodyweight=True)],
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Подходы по умолчанию
# ---------------------------------------------------------------------------

def test_new_exercise_gets_three_empty_sets():
    exercise = PlaylistExercise(name="Squat", muscle_group=MuscleGroup.QUADS)
    prepared = playlist_editor.with_default_sets(exercise)
    assert len(prepared.sets) == playlist_editor.DEFAULT_SET_COUNT == 3
    assert all(not workout_set.completed for workout_set in prepared.sets)
    assert len({workout_set.id for workout_set in prepared.sets}) == 3


def test_exercise_with_sets_is_kept():
    exercise = PlaylistExercise(name="Squat", muscle_group=MuscleGroup.QUADS, sets=[WorkoutSet(reps=5)])
    assert len(playlist_editor.prepare_exercises([exercise])[0].sets) == 1


# ---------------------------------------------------------------------------
# update_set_count
# ---------------------------------------------------------------------------

def test_increase_set_count_copies_first_set(playlist):
    edited = playlist_editor.update_set_count(playlist, "ohp", 3)
    sets = edited.exercises[1].sets
    assert len(sets) == 3
    assert [(s.weight, s.reps) for s in sets] == [(40, 10)] * 3
    assert all(not s.completed for s in sets[1:])
    assert len(playlist.exercises[1].sets) == 1


def test_increase_set_count_keeps_bodyweight_flag(playlist):
    edited = playlist_editor.update_set_count(playlist, "dips", 2)
    assert all(s.is_bodyweight for s in edited.exercises[2].sets)


def test_decrease_set_count_truncates_tail(playlist):
    edited = playlist_editor.update_set_count(playlist, "bench", 1)
    assert [s.id for s in edited.exercises[0].sets] == ["b1"]


def test_update_set_count_unknown_exercise(playlist):
    assert playlist_editor.update_set_count(playlist, "missing", 2) is None


# ---------------------------------------------------------------------------
# move_exercise / remove_exercise
# ---------------------------------------------------------------------------

def test_move_exercise_down(playlist):
    edited = playlist_editor.move_exercise(playlist, "bench", MoveDirection.down)
    assert [e.id for e in edited.exercises] == ["ohp", "bench", "dips"]
    assert [e.id for e in playlist.exercises] == ["bench", "ohp", "dips"]


def test_move_exercise_up(playlist):
    edited = playlist_editor.move_exercise(playlist, "dips", MoveDirection.up)
    assert [e.id for e in edited.exercises] == ["bench", "dips", "ohp"]


@pytest.mark.parametrize("exercise_id, direction", [
    ("bench", MoveDirection.up),
    ("dips", MoveDirection.down),
])
def test_move_exercise_at_edge_keeps_order(playlist, exercise_id, direction):
    edited = playlist_editor.move_exercise(playlist, exercise_id, direction)
    assert [e.id for e in edited.exercises] == ["bench", "ohp", "dips"]


def test_remove_exercise(playlist):
    edited = playlist_editor.remove_exercise(playlist, "ohp")
    assert [e.id for e in edited.exercises] == ["bench", "dips"]
    assert playlist_editor.remove_exercise(playlist, "missing") is None


# ---------------------------------------------------------------------------
# edit_set / complete_set
# ---------------------------------------------------------------------------

def test_edit_set_changes_only_given_fields(playlist):
    edited = playlist_editor.edit_set(playlist, "bench", "b1", reps=10)
    target = playlist_editor.find_set(edited, "bench", "b1")
    assert (target.weight, target.reps) == (60, 10)


def test_edit_completed_set_raises(playlist):
    with pytest.raises(ValueError):
        playlist_editor.edit_set(playlist, "bench", "b2", weight=70)


def test_edit_unknown_set_returns_none(playlist):
    assert playlist_editor.edit_set(playlist, "bench", "nope", weight=70) is None


def test_complete_set_stamps_time(playlist):
    edited = playlist_editor.complete_set(playlist, "ohp", "o1", NOW)
    target = playlist_editor.find_set(edited, "ohp", "o1")
    assert target.completed is True
    assert target.completed_at == NOW
    assert playlist_editor.find_set(playlist, "ohp", "o1").completed is False


def test_complete_set_twice_is_noop(playlist):
    later = datetime(2024, 5, 16)
    edited = playlist_editor.complete_set(playlist, "bench", "b2", later)
    assert playlist_editor.find_set(edited, "bench", "b2").completed_at == NOW


@pytest.mark.parametrize("exercise_id, set_id", [("missing", "b1"), ("bench", "o1")])
def test_complete_set_not_found(playlist, exercise_id, set_id):
    assert playlist_editor.complete_set(playlist, exercise_id, set_id, NOW) is None
