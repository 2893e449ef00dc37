from datetime import datetime

from sqlmodel import Field, SQLModel

SNAPSHOT_ID = 1


class StateSnapshot(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    payload: str  # JSON produced by services.snapshot.dump_snapshot
    saved_at: datetime
