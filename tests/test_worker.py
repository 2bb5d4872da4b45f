# tests/test_worker.py
import logging
import threading

from tasktracker.core.errors import StorageError
from tasktracker.models.task import Task, TaskStatus
from tasktracker.services.task_queue import TaskQueue
from tasktracker.services.worker import CompletionWorker


class FakeStore:
    """Records update_status calls; optionally fails for selected ids."""

    def __init__(self, fail_ids=()):
        self.fail_ids = set(fail_ids)
        self.updates = []
        self._lock = threading.Lock()

    def update_status(self, task_id, status):
        if task_id in self.fail_ids:
            raise StorageError("update failed")
        with self._lock:
            self.updates.append((task_id, status))


def _task(task_id: int) -> Task:
    return Task(id=task_id, title=f"t{task_id}", status=TaskStatus.PENDING.value)


def test_worker_completes_tasks_in_fifo_order():
    store = FakeStore()
    q = TaskQueue(capacity=10)
    worker = CompletionWorker(store, q, processing_delay=0.01)
    tasks = [_task(i) for i in (1, 2, 3)]
    for t in tasks:
        q.enqueue(t)

    worker.start()
    q.close()

    assert worker.join(timeout=5.0)
    assert store.updates == [(i, TaskStatus.COMPLETED) for i in (1, 2, 3)]
    assert all(t.status == "completed" for t in tasks)
    assert worker.processed == 3
    assert worker.failed == 0


def test_worker_logs_store_failure_and_continues(caplog):
    store = FakeStore(fail_ids={2})
    q = TaskQueue(capacity=10)
    worker = CompletionWorker(store, q, processing_delay=0)
    for i in (1, 2, 3):
        q.enqueue(_task(i))
    q.close()

    with caplog.at_level(logging.ERROR, logger="tasktracker.services.worker"):
        worker.run()

    assert [u[0] for u in store.updates] == [1, 3]
    assert worker.processed == 2
    assert worker.failed == 1
    assert any("id=2" in r.getMessage() for r in caplog.records)


def test_worker_exits_when_queue_closed_empty():
    q = TaskQueue()
    worker = CompletionWorker(FakeStore(), q, processing_delay=0)
    worker.start()
    assert worker.is_alive

    q.close()

    assert worker.join(timeout=2.0)
    assert not worker.is_alive


def test_join_before_start_returns_true():
    assert CompletionWorker(FakeStore(), TaskQueue()).join() is True
