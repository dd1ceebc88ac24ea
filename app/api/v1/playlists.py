from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user, get_playlist_repository, get_workout_service
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.repositories.playlist_repository import PlaylistRepository
from app.schemas.playlist import (
    MoveExerciseRequest,
    PlaylistCreate,
    PlaylistRead,
    PlaylistUpdate,
    SetCountUpdate,
    SetEdit,
)
from app.services import playlist_editor
from app.services.workout_service import WorkoutService

router = APIRouter(tags=["playlists"])


# ==========================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# ==========================

async def load_playlist(repo: PlaylistRepository, user_id: int, playlist_id: int) -> PlaylistRead:
    playlist = await repo.get(user_id, playlist_id)
    if playlist is None:
        raise NotFoundError("Плейлист", playlist_id)
    return playlist


async def save_edited(
        repo: PlaylistRepository,
        user_id: int,
        edited: Optional[PlaylistRead]
) -> PlaylistRead:
    if edited is None:
        raise HTTPException(status_code=404, detail="Упражнение или подход не найдены")
    saved = await repo.update(user_id, edited)
    if saved is None:
        raise NotFoundError("Плейлист", edited.id)
    return saved


# ==========================
# ENDPOINTS
# ==========================

@router.get("", response_model=List[PlaylistRead])
async def list_playlists(
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    return await repo.list_for_user(current_user.id)


@router.post("", response_model=PlaylistRead, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist: PlaylistCreate,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service)
):
    """Создать плейлист; schedule_day дополнительно создаёт недельный шаблон"""
    return await service.create_playlist(current_user.id, playlist)


@router.get("/{playlist_id}", response_model=PlaylistRead)
async def get_playlist(
    playlist_id: int,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    return await load_playlist(repo, current_user.id, playlist_id)


@router.put("/{playlist_id}", response_model=PlaylistRead)
async def update_playlist(
    playlist_id: int,
    changes: PlaylistUpdate,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    playlist = await load_playlist(repo, current_user.id, playlist_id)
    update_data = {}
    if changes.name is not None:
        update_data["name"] = changes.name
    if "description" in changes.model_fields_set:
        update_data["description"] = changes.description
    if changes.exercises is not None:
        update_data["exercises"] = playlist_editor.prepare_exercises(changes.exercises)
    return await save_edited(repo, current_user.id, playlist.model_copy(update=update_data))


@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(
    playlist_id: int,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    if not await repo.delete(current_user.id, playlist_id):
        raise NotFoundError("Плейлист", playlist_id)


@router.put("/{playlist_id}/exercises/{exercise_id}/sets", response_model=PlaylistRead)
async def update_set_count(
    playlist_id: int,
    exercise_id: str,
    request: SetCountUpdate,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    """Изменить число подходов; новые подходы копируют вес и повторы первого"""
    playlist = await load_playlist(repo, current_user.id, playlist_id)
    edited = playlist_editor.update_set_count(playlist, exercise_id, request.count)
    return await save_edited(repo, current_user.id, edited)


@router.post("/{playlist_id}/exercises/{exercise_id}/move", response_model=PlaylistRead)
async def move_exercise(
    playlist_id: int,
    exercise_id: str,
    request: MoveExerciseRequest,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    playlist = await load_playlist(repo, current_user.id, playlist_id)
    edited = playlist_editor.move_exercise(playlist, exercise_id, request.direction)
    return await save_edited(repo, current_user.id, edited)


@router.delete("/{playlist_id}/exercises/{exercise_id}", response_model=PlaylistRead)
async def remove_exercise(
    playlist_id: int,
    exercise_id: str,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    playlist = await load_playlist(repo, current_user.id, playlist_id)
    edited = playlist_editor.remove_exercise(playlist, exercise_id)
    return await save_edited(repo, current_user.id, edited)


@router.patch("/{playlist_id}/exercises/{exercise_id}/sets/{set_id}", response_model=PlaylistRead)
async def edit_set(
    playlist_id: int,
    exercise_id: str,
    set_id: str,
    request: SetEdit,
    current_user: User = Depends(get_current_user),
    repo: PlaylistRepository = Depends(get_playlist_repository)
):
    """Правка веса/повторов невыполненного подхода"""
    playlist = await load_playlist(repo, current_user.id, playlist_id)
    try:
        edited = playlist_editor.edit_set(playlist, exercise_id, set_id, request.weight, request.reps)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await save_edited(repo, current_user.id, edited)
