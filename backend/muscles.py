from enum import Enum


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    CORE = "core"
    CARDIO = "cardio"


MUSCLE_GROUPS: tuple[MuscleGroup, ...] = tuple(MuscleGroup)

LABELS: dict[MuscleGroup, str] = {
    MuscleGroup.CHEST: "Chest",
    MuscleGroup.BACK: "Back",
    MuscleGroup.SHOULDERS: "Shoulders",
    MuscleGroup.BICEPS: "Biceps",
    MuscleGroup.TRICEPS: "Triceps",
    MuscleGroup.QUADS: "Quads",
    MuscleGroup.HAMSTRINGS: "Hamstrings",
    MuscleGroup.GLUTES: "Glutes",
    MuscleGroup.CALVES: "Calves",
    MuscleGroup.CORE: "Core",
    MuscleGroup.CARDIO: "Cardio",
}

# Directional: a group listed here receives spillover from the key, not the
# other way round. Do not symmetrise.
SYNERGISTS: dict[MuscleGroup, frozenset[MuscleGroup]] = {
    MuscleGroup.CHEST: frozenset({MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS}),
    MuscleGroup.BACK: frozenset({MuscleGroup.BICEPS}),
    MuscleGroup.SHOULDERS: frozenset({MuscleGroup.TRICEPS}),
    MuscleGroup.BICEPS: frozenset({MuscleGroup.BACK}),
    MuscleGroup.TRICEPS: frozenset({MuscleGroup.CHEST}),
    MuscleGroup.QUADS: frozenset({MuscleGroup.GLUTES}),
    MuscleGroup.HAMSTRINGS: frozenset({MuscleGroup.GLUTES}),
    MuscleGroup.GLUTES: frozenset({MuscleGroup.HAMSTRINGS}),
    MuscleGroup.CALVES: frozenset(),
    MuscleGroup.CORE: frozenset(),
    MuscleGroup.CARDIO: frozenset({MuscleGroup.QUADS, MuscleGroup.CALVES}),
}


def label(group: MuscleGroup | str) -> str:
    """Return the display label for a muscle group."""
    return LABELS[MuscleGroup(group)]


def synergists(group: MuscleGroup | str) -> frozenset[MuscleGroup]:
    """Return the groups that receive spillover when `group` is trained."""
    return SYNERGISTS[MuscleGroup(group)]
