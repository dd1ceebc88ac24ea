from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_user_repository
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserRead, UserUpdate

router = APIRouter(tags=["profile"])


@router.get("", response_model=UserRead)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Получить профиль текущего пользователя"""
    return UserRead.model_validate(current_user)


@router.put("", response_model=UserRead)
async def update_profile(
        profile_update: UserUpdate,
        current_user: User = Depends(get_current_user),
        repo: UserRepository = Depends(get_user_repository)
):
    """Обновить данные профиля пользователя"""
    # Обновляем только переданные поля
    update_data = profile_update.model_dump(exclude_unset=True)
    user = await repo.update_profile(current_user, update_data)
    return UserRead.model_validate(user)
