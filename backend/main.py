from contextlib import asynccontextmanager

from fastapi import FastAPI

import backend.models as _models  # noqa: F401  registers tables with SQLModel metadata
from backend.database import create_db_and_tables
from backend.logger import setup_logger
from backend.routers import fatigue, muscle_groups, sessions


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger()
    create_db_and_tables()
    yield


app = FastAPI(title="Fatigue Tracker", lifespan=lifespan)

app.include_router(muscle_groups.router, prefix="/api/muscle-groups", tags=["muscle-groups"])
app.include_router(fatigue.router, prefix="/api/fatigue", tags=["fatigue"])
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
