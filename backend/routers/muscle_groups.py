from fastapi import APIRouter
from sqlmodel import SQLModel

from backend.muscles import MUSCLE_GROUPS, MuscleGroup, label, synergists

router = APIRouter()


class MuscleGroupRead(SQLModel):
    id: MuscleGroup
    label: str
    synergists: list[MuscleGroup]


@router.get("", response_model=list[MuscleGroupRead])
def list_muscle_groups():
    return [
        MuscleGroupRead(
            id=group,
            label=label(group),
            # Registry order, so the response is stable
            synergists=[g for g in MUSCLE_GROUPS if g in synergists(group)],
        )
        for group in MUSCLE_GROUPS
    ]
