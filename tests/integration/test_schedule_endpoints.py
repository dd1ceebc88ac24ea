"""
Интеграционные тесты эндпоинтов /api/v1/schedule/*.

Покрываемые сценарии:
- GET /schedule/today: тренировка на сегодня вместе с плейлистом
- POST /schedule: 404 для неизвестного плейлиста, дата со смещением приводится к UTC
- POST /schedule/{id}/exercises/{ex}/sets/{set}/complete: автоматическое
  закрытие тренировки, 404 для неизвестного подхода, 503 при сбое записи
"""

import pytest
from datetime import datetime

from app.core.exceptions import StoreError
from app.models.enums import MuscleGroup
from app.schemas.playlist import PlaylistExercise, PlaylistRead, WorkoutSet
from app.schemas.schedule import ScheduledWorkoutRead

pytestmark = pytest.mark.integration

COMPLETE_URL = "/api/v1/schedule/7/exercises/row/sets/{set_id}/complete"


def make_playlist(done: int) -> PlaylistRead:
    return PlaylistRead(
        id=3,
        name="Pull Day",
        exercises=[
            PlaylistExercise(
                id="row",
                name="Barbell Row",
                muscle_group=MuscleGroup.BACK,
                sets=[WorkoutSet(id=f"r{n}", completed=n < done) for n in range(3)],
            )
        ],
    )


@pytest.fixture
def today_scheduled(mock_schedule) -> ScheduledWorkoutRead:
    scheduled = ScheduledWorkoutRead(
        id=7, playlist_id=3, date=datetime.combine(datetime.utcnow().date(), datetime.min.time())
    )
    mock_schedule.get.return_value = scheduled
    mock_schedule.list_for_user.return_value = [scheduled]
    mock_schedule.update.side_effect = lambda user_id, item: item
    return scheduled


@pytest.fixture
def writable(mock_playlists, mock_progress):
    mock_playlists.update.side_effect = lambda user_id, playlist: playlist
    mock_progress.save.side_effect = lambda user_id, summary: summary


# ---------------------------------------------------------------------------
# GET /schedule/today
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_todays_workout(user_client, today_scheduled, mock_playlists):
    mock_playlists.get.return_value = make_playlist(done=0)

    response = await user_client.get("/api/v1/schedule/today")

    assert response.status_code == 200
    data = response.json()
    assert data["scheduled"]["id"] == 7
    assert data["playlist"]["name"] == "Pull Day"


@pytest.mark.asyncio
async def test_todays_workout_empty(user_client, mock_schedule):
    mock_schedule.list_for_user.return_value = []
    response = await user_client.get("/api/v1/schedule/today")
    assert response.status_code == 200
    assert response.json() == {"scheduled": None, "playlist": None}


@pytest.mark.asyncio
async def test_todays_workout_unauthenticated(client):
    response = await client.get("/api/v1/schedule/today")
    assert response.status_code in (401, 403)


# ---------------------------------------------------------------------------
# POST /schedule
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_schedule_workout(user_client, mock_playlists, mock_schedule):
    mock_playlists.get.return_value = make_playlist(done=0)
    mock_schedule.create.return_value = ScheduledWorkoutRead(id=8, playlist_id=3, date=datetime(2024, 5, 20))

    response = await user_client.post("/api/v1/schedule", json={"playlist_id": 3, "date": "2024-05-20T00:00:00"})

    assert response.status_code == 201
    assert response.json()["completed"] is False


@pytest.mark.asyncio
async def test_schedule_workout_with_utc_suffix_stores_naive_utc(user_client, mock_playlists, mock_schedule):
    mock_playlists.get.return_value = make_playlist(done=0)
    mock_schedule.create.return_value = ScheduledWorkoutRead(id=8, playlist_id=3, date=datetime(2024, 5, 20))

    response = await user_client.post("/api/v1/schedule", json={"playlist_id": 3, "date": "2024-05-20T06:30:00.000Z"})

    assert response.status_code == 201
    _, item = mock_schedule.create.await_args.args
    assert item.date == datetime(2024, 5, 20, 6, 30)
    assert item.date.tzinfo is None


@pytest.mark.asyncio
async def test_schedule_unknown_playlist_returns_404(user_client, mock_playlists, mock_schedule):
    mock_playlists.get.return_value = None

    response = await user_client.post("/api/v1/schedule", json={"playlist_id": 99, "date": "2024-05-20T00:00:00"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Не найдено: Плейлист 99"
    mock_schedule.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_scheduled_missing_returns_404(user_client, mock_schedule):
    mock_schedule.delete.return_value = False
    response = await user_client.delete("/api/v1/schedule/7")
    assert response.status_code == 404


# ---------------------------------------------------------------------------
# complete set
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_complete_last_set_closes_workout(user_client, today_scheduled, writable, mock_playlists):
    mock_playlists.get.return_value = make_playlist(done=2)

    response = await user_client.post(COMPLETE_URL.format(set_id="r2"))

    assert response.status_code == 200
    data = response.json()
    assert data["completed"] is True
    assert data["completed_at"] is not None
    assert data["progress"] == 100


@pytest.mark.asyncio
async def test_complete_first_set_updates_progress(user_client, today_scheduled, writable, mock_playlists,
                                                   mock_progress):
    mock_playlists.get.return_value = make_playlist(done=0)

    response = await user_client.post(COMPLETE_URL.format(set_id="r0"))

    assert response.status_code == 200
    data = response.json()
    assert data["completed"] is False
    assert data["progress"] == pytest.approx(100 / 3)
    mock_progress.save.assert_awaited_once()


@pytest.mark.asyncio
async def test_complete_unknown_set_returns_404(user_client, today_scheduled, mock_playlists):
    mock_playlists.get.return_value = make_playlist(done=0)

    response = await user_client.post(COMPLETE_URL.format(set_id="missing"))

    assert response.status_code == 404
    mock_playlists.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_complete_set_store_failure_returns_503(user_client, today_scheduled, mock_playlists):
    mock_playlists.get.return_value = make_playlist(done=0)
    mock_playlists.update.side_effect = StoreError("timeout")

    response = await user_client.post(COMPLETE_URL.format(set_id="r0"))

    assert response.status_code == 503
    assert response.json()["detail"] == "Не удалось сохранить изменения, попробуйте позже"
