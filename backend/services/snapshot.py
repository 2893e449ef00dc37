"""
Serialize the app state to JSON and validate it on the way back in.

Loading never fails: a missing, unparsable or schema-violating snapshot is
replaced by a fresh state.
"""

from datetime import datetime

from loguru import logger
from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError, field_validator

from backend.muscles import MUSCLE_GROUPS, MuscleGroup
from backend.services.app_state import AppState, new_app_state
from backend.services.fatigue import MAX_SCORE, MIN_SCORE, FatigueState
from backend.services.history import MAX_LOAD, MIN_LOAD, MIN_MINUTES, HistoryLog, WorkoutSession

SCHEMA_VERSION = 1


class SessionPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str = Field(min_length=1)
    logged_at: AwareDatetime = Field(strict=False)
    muscle: MuscleGroup = Field(strict=False)
    minutes: int = Field(ge=MIN_MINUTES)
    load: int = Field(ge=MIN_LOAD, le=MAX_LOAD)
    note: str | None


class SnapshotPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    schema_version: int
    fatigue: dict[str, float]
    history: list[SessionPayload]
    last_evaluated: AwareDatetime = Field(strict=False)

    @field_validator("schema_version")
    @classmethod
    def _known_version(cls, value: int) -> int:
        if value != SCHEMA_VERSION:
            raise ValueError(f"unsupported schema version {value}")
        return value

    @field_validator("fatigue", mode="before")
    @classmethod
    def _ints_are_scores(cls, value):
        # JSON has no float/int distinction; strict mode would reject 0.
        if isinstance(value, dict):
            return {
                k: float(v) if isinstance(v, int) and not isinstance(v, bool) else v
                for k, v in value.items()
            }
        return value

    @field_validator("fatigue")
    @classmethod
    def _total_and_bounded(cls, value: dict[str, float]) -> dict[str, float]:
        expected = {g.value for g in MUSCLE_GROUPS}
        if set(value) != expected:
            raise ValueError("fatigue must have exactly one score per muscle group")
        for name, score in value.items():
            if not MIN_SCORE <= score <= MAX_SCORE:
                raise ValueError(f"score for {name} out of range: {score}")
        return value

    @field_validator("history")
    @classmethod
    def _unique_ids(cls, value: list[SessionPayload]) -> list[SessionPayload]:
        ids = [s.id for s in value]
        if len(ids) != len(set(ids)):
            raise ValueError("duplicate session ids in history")
        return value


def _to_payload(app: AppState) -> SnapshotPayload:
    return SnapshotPayload(
        schema_version=SCHEMA_VERSION,
        fatigue={group.value: score for group, score in app.fatigue.scores.items()},
        history=[
            SessionPayload(
                id=s.id,
                logged_at=s.logged_at,
                muscle=s.muscle,
                minutes=s.minutes,
                load=s.load,
                note=s.note,
            )
            for s in app.history
        ],
        last_evaluated=app.last_evaluated,
    )


def _from_payload(payload: SnapshotPayload) -> AppState:
    return AppState(
        last_evaluated=payload.last_evaluated,
        fatigue=FatigueState(
            scores={MuscleGroup(name): score for name, score in payload.fatigue.items()}
        ),
        history=HistoryLog(
            sessions=tuple(
                WorkoutSession(
                    id=s.id,
                    logged_at=s.logged_at,
                    muscle=s.muscle,
                    minutes=s.minutes,
                    load=s.load,
                    note=s.note,
                )
                for s in payload.history
            )
        ),
    )


def dump_snapshot(app: AppState) -> str:
    return _to_payload(app).model_dump_json()


def load_snapshot(raw: str | bytes | None, now: datetime) -> AppState:
    """Parse a stored snapshot, falling back to a fresh state on any problem."""
    if raw is None:
        logger.info("No stored snapshot, starting from initial state")
        return new_app_state(now)
    try:
        payload = SnapshotPayload.model_validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0]["msg"]
        logger.warning(f"Discarding malformed snapshot ({exc.error_count()} error(s)): {first}")
        return new_app_state(now)
    return _from_payload(payload)
