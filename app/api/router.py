from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.profile import router as profile_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.playlists import router as playlists_router
from app.api.v1.schedule import router as schedule_router
from app.api.v1.weeks import router as weeks_router
from app.api.v1.cycles import router as cycles_router
from app.api.v1.progress import router as progress_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(profile_router, prefix="/profile", tags=["profile"])
api_router.include_router(workouts_router, prefix="/workouts", tags=["workouts"])
api_router.include_router(playlists_router, prefix="/playlists", tags=["playlists"])
api_router.include_router(schedule_router, prefix="/schedule", tags=["schedule"])
api_router.include_router(weeks_router, prefix="/weeks", tags=["weeks"])
api_router.include_router(cycles_router, prefix="/cycles", tags=["cycles"])
api_router.include_router(progress_router, prefix="/progress", tags=["progress"])
