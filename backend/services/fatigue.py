from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from backend.muscles import MUSCLE_GROUPS, MuscleGroup, synergists
from backend.services.history import WorkoutSession

MIN_SCORE = 0.0
MAX_SCORE = 100.0

BASE_DELTA = Decimal("4")
LOAD_FACTOR = Decimal("0.7")
SPILL_FRACTION = Decimal("0.1")


@dataclass(frozen=True)
class FatigueState:
    """A fatigue score in [0, 100] for every muscle group in the registry."""

    scores: Mapping[MuscleGroup, float]

    def __post_init__(self) -> None:
        # Read-only copy, so scores cannot be changed around the range check.
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))
        missing = set(MUSCLE_GROUPS) - set(self.scores)
        if missing:
            names = ", ".join(sorted(g.value for g in missing))
            raise ValueError(f"Fatigue state is missing muscle groups: {names}")
        extra = set(self.scores) - set(MUSCLE_GROUPS)
        if extra:
            raise ValueError(f"Fatigue state has unknown muscle groups: {extra}")
        for group, score in self.scores.items():
            if not MIN_SCORE <= score <= MAX_SCORE:
                raise ValueError(f"Score for {group.value} out of range: {score}")

    def __getitem__(self, group: MuscleGroup) -> float:
        return self.scores[group]


# ---------------------------------------------------------------------------
# State and decay
# ---------------------------------------------------------------------------


def initial() -> FatigueState:
    return FatigueState(scores={group: MIN_SCORE for group in MUSCLE_GROUPS})


def decay(state: FatigueState, days_elapsed: int, rate_per_day: float) -> FatigueState:
    """Reduce every score by `rate_per_day * days_elapsed`, flooring at zero.

    Zero elapsed days returns `state` itself.
    """
    if days_elapsed < 0:
        raise ValueError(f"days_elapsed must be >= 0, got {days_elapsed}")
    if rate_per_day < 0:
        raise ValueError(f"rate_per_day must be >= 0, got {rate_per_day}")
    if days_elapsed == 0:
        return state

    recovered = rate_per_day * days_elapsed
    return FatigueState(
        scores={group: max(MIN_SCORE, score - recovered) for group, score in state.scores.items()}
    )


# ---------------------------------------------------------------------------
# Session accumulation
# ---------------------------------------------------------------------------


def _session_delta(session: WorkoutSession) -> Decimal:
    return BASE_DELTA + LOAD_FACTOR * session.load * session.minutes


def _spill(delta: Decimal) -> Decimal:
    # Half away from zero; delta is always positive.
    return (delta * SPILL_FRACTION).quantize(Decimal(1), rounding=ROUND_HALF_UP)


def session_delta(session: WorkoutSession) -> float:
    """Direct fatigue contribution of a session to its target muscle."""
    return float(_session_delta(session))


def spillover(session: WorkoutSession) -> int:
    """Fatigue added to each synergist of the session's target muscle."""
    return int(_spill(_session_delta(session)))


def apply_session(state: FatigueState, session: WorkoutSession) -> FatigueState:
    """Add a session's fatigue to its target muscle and spill onto synergists.

    Each group is clamped at 100 on its own. Spillover is first-degree only.
    """
    delta = _session_delta(session)
    spill = float(_spill(delta))

    scores = dict(state.scores)
    target = session.muscle
    scores[target] = min(MAX_SCORE, scores[target] + float(delta))
    for neighbour in synergists(target):
        scores[neighbour] = min(MAX_SCORE, scores[neighbour] + spill)
    return FatigueState(scores=scores)
