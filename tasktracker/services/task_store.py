# tasktracker/services/task_store.py
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, select

from tasktracker.core.errors import StorageError
from tasktracker.db.session import session_scope
from tasktracker.models.task import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Durable task table on top of a SQLAlchemy engine.

    Thread-safety:
    - every call runs in its own short-lived Session
    - connection handling is delegated to the engine's pool

    Every SQLAlchemy failure surfaces as StorageError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create_schema(self) -> None:
        """Create the tasks table if it is missing. Safe to call repeatedly."""
        try:
            SQLModel.metadata.create_all(self._engine, tables=[Task.__table__])
        except SQLAlchemyError as e:
            raise StorageError("schema creation failed") from e
        logger.info("TaskStore ready url=%s", self._engine.url.render_as_string(hide_password=True))

    def insert(self, task: Task) -> int:
        """Persist a new row and assign task.id."""
        task.id = None
        try:
            with session_scope(self._engine) as db:
                db.add(task)
                db.commit()
                db.refresh(task)
        except SQLAlchemyError as e:
            raise StorageError("save failed") from e

        if task.id is None:
            raise StorageError("save failed")
        logger.debug("Task added id=%s status=%s", task.id, task.status)
        return task.id

    def update_status(self, task_id: int, status: TaskStatus) -> None:
        """Set the status column. A missing id is a silent no-op."""
        try:
            with session_scope(self._engine) as db:
                task = db.get(Task, task_id)
                if task is None:
                    logger.debug("update_status: no task id=%s", task_id)
                    return
                task.status = TaskStatus(status).value
                db.add(task)
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError("update failed") from e

    def list_all(self) -> List[Task]:
        """All tasks, newest first."""
        stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        try:
            with session_scope(self._engine) as db:
                return list(db.exec(stmt).all())
        except SQLAlchemyError as e:
            raise StorageError("list failed") from e

    def ping(self) -> None:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError("database connection failed") from e

    def close(self) -> None:
        self._engine.dispose()
