# tasktracker/services/worker.py
"""
Completion worker.

A single background thread that:
- drains the task queue in FIFO order,
- simulates work with a fixed delay per task,
- marks the task completed in the store.

A store failure is logged and the task is left pending; there is no retry.
The loop ends when the queue is closed and empty.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from tasktracker.core.errors import StorageError
from tasktracker.models.task import Task, TaskStatus
from tasktracker.services.task_queue import TaskQueue
from tasktracker.services.task_store import TaskStore

logger = logging.getLogger(__name__)


class CompletionWorker:
    def __init__(
        self,
        store: TaskStore,
        queue: TaskQueue,
        *,
        processing_delay: float = 5.0,
        name: str = "completion-worker",
    ) -> None:
        self._store = store
        self._queue = queue
        self._delay = max(0.0, float(processing_delay))
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._counter_lock = threading.Lock()
        self.processed = 0
        self.failed = 0

    @property
    def processing_delay(self) -> float:
        return self._delay

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("worker already started")
        self._thread = threading.Thread(target=self.run, name=self._name, daemon=True)
        self._thread.start()
        logger.info("Completion worker started delay=%.2fs", self._delay)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the loop to exit. Returns True once the thread is gone."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def run(self) -> None:
        for task in self._queue:
            self.process(task)
        logger.info(
            "Completion worker stopped processed=%s failed=%s", self.processed, self.failed
        )

    def process(self, task: Task) -> bool:
        logger.info("Processing task id=%s title=%r", task.id, task.title)

        # simulated work; not interruptible
        time.sleep(self._delay)

        task.status = TaskStatus.COMPLETED.value
        try:
            self._store.update_status(task.id, TaskStatus.COMPLETED)
        except StorageError:
            logger.exception("Failed to mark task completed id=%s; it stays pending", task.id)
            with self._counter_lock:
                self.failed += 1
            return False

        with self._counter_lock:
            self.processed += 1
        logger.info("Task completed id=%s title=%r", task.id, task.title)
        return True
