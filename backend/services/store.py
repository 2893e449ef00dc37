from datetime import datetime

from loguru import logger
from sqlmodel import Session

from backend.models import SNAPSHOT_ID, StateSnapshot
from backend.services.app_state import AppState
from backend.services.snapshot import dump_snapshot, load_snapshot


def load_app_state(session: Session, now: datetime) -> AppState:
    """Return the persisted app state, or a fresh one if none is usable."""
    row = session.get(StateSnapshot, SNAPSHOT_ID)
    return load_snapshot(row.payload if row is not None else None, now)


def save_app_state(app: AppState, session: Session, now: datetime) -> None:
    """Write `app` as the single snapshot row and commit."""
    row = session.get(StateSnapshot, SNAPSHOT_ID)
    payload = dump_snapshot(app)
    if row is None:
        row = StateSnapshot(id=SNAPSHOT_ID, payload=payload, saved_at=now)
    else:
        row.payload = payload
        row.saved_at = now
    session.add(row)
    session.commit()
    logger.debug(f"Saved snapshot with {len(app.history)} session(s)")
