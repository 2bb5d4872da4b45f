# tasktracker/services/task_queue.py
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, Iterator, Optional

from tasktracker.core.errors import QueueClosedError
from tasktracker.models.task import Task

logger = logging.getLogger(__name__)


class TaskQueue:
    """
    Bounded FIFO hand-off between request threads and the completion worker.

    - enqueue blocks while the queue is full (backpressure, nothing is dropped)
    - dequeue blocks until an item arrives; it returns None only after
      close() has been called and every buffered item was delivered
    - after close() every enqueue raises QueueClosedError, including
      producers that were already waiting for space
    """

    def __init__(self, capacity: int = 10) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._items: Deque[Task] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def enqueue(self, task: Task) -> None:
        with self._not_full:
            if len(self._items) >= self._capacity and not self._closed:
                logger.debug("Queue full (%s); producer waiting task_id=%s", self._capacity, task.id)
            while len(self._items) >= self._capacity and not self._closed:
                self._not_full.wait()
            if self._closed:
                raise QueueClosedError()
            self._items.append(task)
            self._not_empty.notify()

    def dequeue(self) -> Optional[Task]:
        with self._not_empty:
            while not self._items and not self._closed:
                self._not_empty.wait()
            if not self._items:
                return None
            task = self._items.popleft()
            self._not_full.notify()
            return task

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = len(self._items)
            self._not_empty.notify_all()
            self._not_full.notify_all()
        logger.info("Task queue closed; %s item(s) left to drain", pending)

    def __iter__(self) -> Iterator[Task]:
        while True:
            task = self.dequeue()
            if task is None:
                return
            yield task
