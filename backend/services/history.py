from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from backend.muscles import MuscleGroup

MIN_MINUTES = 1
MIN_LOAD = 1
MAX_LOAD = 5


def new_session_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class WorkoutSession:
    """One logged workout. Never mutated after creation."""

    muscle: MuscleGroup
    minutes: int
    load: int
    logged_at: datetime
    note: str | None = None
    id: str = field(default_factory=new_session_id)

    def __post_init__(self) -> None:
        # Raw input is clamped at the API boundary; reaching here out of range
        # means a caller skipped that step.
        if not isinstance(self.muscle, MuscleGroup):
            raise ValueError(f"Unknown muscle group: {self.muscle!r}")
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise ValueError(f"minutes must be an int, got {self.minutes!r}")
        if self.minutes < MIN_MINUTES:
            raise ValueError(f"minutes must be >= {MIN_MINUTES}, got {self.minutes}")
        if isinstance(self.load, bool) or not isinstance(self.load, int):
            raise ValueError(f"load must be an int, got {self.load!r}")
        if not MIN_LOAD <= self.load <= MAX_LOAD:
            raise ValueError(f"load must be in {MIN_LOAD}..{MAX_LOAD}, got {self.load}")
        if self.logged_at.tzinfo is None:
            raise ValueError("logged_at must be timezone-aware")


@dataclass(frozen=True)
class HistoryLog:
    """Sessions ordered most recent first."""

    sessions: tuple[WorkoutSession, ...] = ()

    def __post_init__(self) -> None:
        ids = [s.id for s in self.sessions]
        if len(ids) != len(set(ids)):
            raise ValueError("Session ids must be unique within a history log")

    def __len__(self) -> int:
        return len(self.sessions)

    def __iter__(self) -> Iterator[WorkoutSession]:
        return iter(self.sessions)


@dataclass(frozen=True)
class HistoryTotals:
    session_count: int
    total_minutes: int


def append(log: HistoryLog, session: WorkoutSession) -> HistoryLog:
    """Return a new log with `session` at the front."""
    if find(log, session.id) is not None:
        raise ValueError(f"Session {session.id} already in history")
    return HistoryLog(sessions=(session, *log.sessions))


def remove(log: HistoryLog, session_id: str) -> HistoryLog:
    """Remove the session with `session_id`; unknown ids leave the log as is."""
    for index, session in enumerate(log.sessions):
        if session.id == session_id:
            return HistoryLog(sessions=log.sessions[:index] + log.sessions[index + 1 :])
    return log


def find(log: HistoryLog, session_id: str) -> WorkoutSession | None:
    for session in log.sessions:
        if session.id == session_id:
            return session
    return None


def totals(log: HistoryLog) -> HistoryTotals:
    return HistoryTotals(
        session_count=len(log.sessions),
        total_minutes=sum(s.minutes for s in log.sessions),
    )


def minutes_by_muscle(log: HistoryLog) -> dict[MuscleGroup, int]:
    """Return total logged minutes per muscle group, zero for untrained groups."""
    result = {group: 0 for group in MuscleGroup}
    for session in log.sessions:
        result[session.muscle] += session.minutes
    return result
