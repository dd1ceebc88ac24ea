import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.database import init_database
from app.core.db import AsyncSessionLocal
from app.core.exceptions import register_exception_handlers
from app.core.sample_data import SAMPLE_EMAIL, create_sample_data
from app.repositories.user_repository import UserRepository

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="TrAi Tracker - weekly training progress")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")
register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено!")

    if not settings.SEED_SAMPLE_DATA:
        return

    async with AsyncSessionLocal() as session:
        existing_user = await UserRepository(session).get_by_email(SAMPLE_EMAIL)

        if not existing_user:
            await create_sample_data(session)
        else:
            logger.info(f"✅ Демо-пользователь уже существует: {existing_user.email} (ID: {existing_user.id})")


@app.get("/")
async def root():
    base_url = "http://localhost:8000"

    return {
        "app": "TrAi Tracker",
        "message": "Weekly training progress by muscle group",
        "links": {
            "💪 Workouts": f"{base_url}/api/v1/workouts",
            "📋 Playlists": f"{base_url}/api/v1/playlists",
            "📅 Today": f"{base_url}/api/v1/schedule/today",
            "📈 Progress": f"{base_url}/api/v1/progress/summary",
            "📚 Docs": f"{base_url}/docs",
        }
    }
