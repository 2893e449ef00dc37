from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from loguru import logger

from backend.services import history
from backend.services.fatigue import FatigueState, apply_session, decay, initial
from backend.services.history import HistoryLog, WorkoutSession

SECONDS_PER_DAY = 86400

FRESH_BELOW = 30.0
RECOVERING_BELOW = 70.0


@dataclass(frozen=True)
class AppState:
    """Everything the app persists between runs."""

    last_evaluated: datetime
    fatigue: FatigueState = field(default_factory=initial)
    history: HistoryLog = field(default_factory=HistoryLog)


def new_app_state(now: datetime) -> AppState:
    return AppState(last_evaluated=now)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days from `earlier` to `later`; zero if the clock went backwards."""
    seconds = (later - earlier).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // SECONDS_PER_DAY)


def evaluate(app: AppState, now: datetime, rate_per_day: float) -> AppState:
    """Apply decay for every whole day since the last evaluation.

    `last_evaluated` advances by the decayed days only, so a partial day
    carries over to the next evaluation.
    """
    days = days_between(app.last_evaluated, now)
    if days == 0:
        return app
    logger.info(f"Decaying fatigue by {days} day(s) at {rate_per_day}/day")
    return replace(
        app,
        fatigue=decay(app.fatigue, days, rate_per_day),
        last_evaluated=app.last_evaluated + timedelta(days=days),
    )


def log_session(
    app: AppState, session: WorkoutSession, now: datetime, rate_per_day: float
) -> AppState:
    """Bring decay up to date, then add the session's fatigue and record it."""
    app = evaluate(app, now, rate_per_day)
    logger.info(
        f"Logging session {session.id}: {session.muscle.value}, "
        f"{session.minutes} min, load {session.load}"
    )
    return replace(
        app,
        fatigue=apply_session(app.fatigue, session),
        history=history.append(app.history, session),
    )


def delete_session(app: AppState, session_id: str) -> AppState:
    """Drop a session from history. Fatigue it already caused is kept."""
    new_history = history.remove(app.history, session_id)
    if new_history is app.history:
        logger.debug(f"Session {session_id} not in history, nothing to delete")
        return app
    logger.info(f"Deleted session {session_id}")
    return replace(app, history=new_history)


def reset_fatigue(app: AppState, now: datetime) -> AppState:
    logger.info("Resetting fatigue to initial state")
    return replace(app, fatigue=initial(), last_evaluated=now)


def recovery_status(score: float) -> str:
    if score < FRESH_BELOW:
        return "fresh"
    if score < RECOVERING_BELOW:
        return "recovering"
    return "fatigued"
