import math
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import field_validator
from sqlmodel import Session, SQLModel

from backend.clock import utcnow
from backend.config import settings
from backend.database import get_session
from backend.muscles import MuscleGroup, label
from backend.services import history
from backend.services.app_state import delete_session, log_session
from backend.services.history import MAX_LOAD, MIN_LOAD, MIN_MINUTES, WorkoutSession
from backend.services.store import load_app_state, save_app_state

router = APIRouter()

# Form input beyond one day is treated as a typo for a full day.
MAX_MINUTES = 24 * 60

SessionDep = Annotated[Session, Depends(get_session)]
NowDep = Annotated[datetime, Depends(utcnow)]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class WorkoutSessionRead(SQLModel):
    id: str
    muscle: MuscleGroup
    label: str
    minutes: int
    load: int
    note: str | None
    logged_at: str  # ISO format


class WorkoutSessionCreate(SQLModel):
    """Raw form input. Out-of-range numbers are rounded and clamped, not rejected."""

    muscle: MuscleGroup
    minutes: int
    load: int
    note: str | None = None

    @field_validator("minutes", mode="before")
    @classmethod
    def _clamp_minutes(cls, value):
        rounded = _round_number(value)
        return value if rounded is None else min(MAX_MINUTES, max(MIN_MINUTES, rounded))

    @field_validator("load", mode="before")
    @classmethod
    def _clamp_load(cls, value):
        rounded = _round_number(value)
        return value if rounded is None else min(MAX_LOAD, max(MIN_LOAD, rounded))

    @field_validator("note")
    @classmethod
    def _blank_note_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class TotalsRead(SQLModel):
    session_count: int
    total_minutes: int
    minutes_by_muscle: dict[MuscleGroup, int]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _round_number(value) -> int | None:
    """Round a numeric value half-up; None for anything that is not a number."""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, bool):
        return None
    # Arbitrarily large ints are already whole and would overflow a float.
    if isinstance(value, int):
        return value
    if not isinstance(value, float):
        return None
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return math.floor(value + 0.5)


def _build_session_read(s: WorkoutSession) -> WorkoutSessionRead:
    return WorkoutSessionRead(
        id=s.id,
        muscle=s.muscle,
        label=label(s.muscle),
        minutes=s.minutes,
        load=s.load,
        note=s.note,
        logged_at=s.logged_at.isoformat(),
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("", response_model=list[WorkoutSessionRead])
def list_sessions(session: SessionDep, now: NowDep):
    app = load_app_state(session, now)
    return [_build_session_read(s) for s in app.history]


@router.post("", response_model=WorkoutSessionRead, status_code=201)
def create_session(body: WorkoutSessionCreate, session: SessionDep, now: NowDep):
    workout = WorkoutSession(
        muscle=body.muscle,
        minutes=body.minutes,
        load=body.load,
        note=body.note,
        logged_at=now,
    )
    app = log_session(load_app_state(session, now), workout, now, settings.decay_per_day)
    save_app_state(app, session, now)
    return _build_session_read(workout)


@router.get("/totals", response_model=TotalsRead)
def get_totals(session: SessionDep, now: NowDep):
    app = load_app_state(session, now)
    summary = history.totals(app.history)
    return TotalsRead(
        session_count=summary.session_count,
        total_minutes=summary.total_minutes,
        minutes_by_muscle=history.minutes_by_muscle(app.history),
    )


@router.delete("/{session_id}", status_code=204)
def remove_session(session_id: str, session: SessionDep, now: NowDep):
    # Unknown ids are not an error: deleting twice is the same as deleting once.
    app = load_app_state(session, now)
    updated = delete_session(app, session_id)
    if updated is not app:
        save_app_state(updated, session, now)
