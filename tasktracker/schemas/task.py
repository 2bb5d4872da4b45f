# tasktracker/schemas/task.py
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator


# ── create request ───────────────────────────────────────────
class TaskCreate(BaseModel):
    # id / status / completed / created_at are server-assigned; extra keys are ignored.
    title: str
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return "" if v is None else v


# ── read response ────────────────────────────────────────────
class TaskRead(BaseModel):
    id: int
    title: str
    description: str
    completed: bool
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)
