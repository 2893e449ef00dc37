from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session, SQLModel

from backend.clock import utcnow
from backend.config import settings
from backend.database import get_session
from backend.muscles import MUSCLE_GROUPS, MuscleGroup, label
from backend.services.app_state import AppState, evaluate, recovery_status, reset_fatigue
from backend.services.store import load_app_state, save_app_state

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]
NowDep = Annotated[datetime, Depends(utcnow)]


class MuscleFatigueRead(SQLModel):
    muscle: MuscleGroup
    label: str
    score: float
    status: str


class FatigueRead(SQLModel):
    last_evaluated: str  # ISO format
    groups: list[MuscleFatigueRead]


def build_fatigue_read(app: AppState) -> FatigueRead:
    return FatigueRead(
        last_evaluated=app.last_evaluated.isoformat(),
        groups=[
            MuscleFatigueRead(
                muscle=group,
                label=label(group),
                score=app.fatigue[group],
                status=recovery_status(app.fatigue[group]),
            )
            for group in MUSCLE_GROUPS
        ],
    )


@router.get("", response_model=FatigueRead)
def get_fatigue(session: SessionDep, now: NowDep):
    app = evaluate(load_app_state(session, now), now, settings.decay_per_day)
    save_app_state(app, session, now)
    return build_fatigue_read(app)


@router.post("/reset", response_model=FatigueRead)
def reset(session: SessionDep, now: NowDep):
    app = reset_fatigue(load_app_state(session, now), now)
    save_app_state(app, session, now)
    return build_fatigue_read(app)
