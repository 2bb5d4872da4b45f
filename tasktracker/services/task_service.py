# tasktracker/services/task_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from tasktracker.core.config import Settings
from tasktracker.core.errors import StorageError, ValidationError
from tasktracker.db.session import build_db_url, create_db_engine
from tasktracker.models.task import Task, TaskStatus, utcnow
from tasktracker.schemas.task import TaskCreate, TaskRead
from tasktracker.services.task_queue import TaskQueue
from tasktracker.services.task_store import TaskStore
from tasktracker.services.worker import CompletionWorker

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service context built once at startup and shared by every handler.

    Owns the store, the queue and the single completion worker. start() and
    stop() are the lifecycle hooks the application lifespan calls.
    """

    def __init__(self, store: TaskStore, queue: TaskQueue, worker: CompletionWorker) -> None:
        self.store = store
        self.queue = queue
        self.worker = worker

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskService":
        engine = create_db_engine(build_db_url(settings.database_url))
        store = TaskStore(engine)
        queue = TaskQueue(settings.queue_capacity)
        worker = CompletionWorker(store, queue, processing_delay=settings.processing_delay_seconds)
        return cls(store, queue, worker)

    # ── lifecycle ────────────────────────────────────────────

    def start(self) -> None:
        """Ensure the schema and launch the worker. StorageError here is fatal."""
        try:
            self.store.create_schema()
        except StorageError:
            self.store.close()
            raise
        self.worker.start()

    def stop(self, drain_timeout: Optional[float] = None) -> bool:
        """
        Close the queue, wait for the worker to drain it, then close the store.

        Draining can take queued * processing_delay seconds.
        """
        queued = len(self.queue)
        self.queue.close()
        if queued:
            logger.info(
                "Waiting for worker to drain %s task(s) (~%.1fs)",
                queued,
                queued * self.worker.processing_delay,
            )
        drained = self.worker.join(drain_timeout)
        if not drained:
            logger.warning("Worker did not finish within %.1fs", drain_timeout or 0.0)
        self.store.close()
        return drained

    # ── handlers ─────────────────────────────────────────────

    def create_task(self, payload: TaskCreate) -> TaskRead:
        title = payload.title or ""
        if not title.strip():
            raise ValidationError()

        task = Task(
            title=title,
            description=payload.description or "",
            status=TaskStatus.PENDING.value,
            created_at=utcnow(),
        )
        self.store.insert(task)

        # Snapshot before the hand-off; the worker owns the instance afterwards.
        created = TaskRead.model_validate(task)
        self.queue.enqueue(task)
        logger.info("Task queued id=%s queued=%s", created.id, len(self.queue))
        return created

    def list_tasks(self) -> List[Task]:
        return self.store.list_all()
