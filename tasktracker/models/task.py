# tasktracker/models/task.py
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


def utcnow() -> datetime:
    # Aware UTC; SQLite may hand it back without the offset, read models re-attach it.
    return datetime.now(timezone.utc)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    description: str = ""
    # Never written after creation; status is the source of truth.
    completed: bool = False
    status: str = Field(default=TaskStatus.PENDING.value)
    created_at: datetime = Field(default_factory=utcnow, index=True)
