# tests/test_task_queue.py
import threading
import time

import pytest

from tasktracker.core.errors import QueueClosedError
from tasktracker.models.task import Task
from tasktracker.services.task_queue import TaskQueue


def _task(task_id: int) -> Task:
    return Task(id=task_id, title=f"t{task_id}")


def test_fifo_order():
    q = TaskQueue(capacity=3)
    for i in (1, 2, 3):
        q.enqueue(_task(i))

    assert [q.dequeue().id for _ in range(3)] == [1, 2, 3]


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        TaskQueue(capacity=0)


def test_close_drains_buffered_items_before_signalling_end():
    q = TaskQueue(capacity=5)
    q.enqueue(_task(1))
    q.enqueue(_task(2))
    q.close()

    assert q.closed
    assert [t.id for t in q] == [1, 2]
    assert q.dequeue() is None


def test_enqueue_after_close_raises():
    q = TaskQueue()
    q.close()
    q.close()  # idempotent

    with pytest.raises(QueueClosedError):
        q.enqueue(_task(1))


def test_full_queue_blocks_producer_until_consumer_takes_one():
    q = TaskQueue(capacity=1)
    q.enqueue(_task(1))
    done = threading.Event()

    def produce():
        q.enqueue(_task(2))
        done.set()

    t = threading.Thread(target=produce, daemon=True)
    t.start()

    assert not done.wait(0.2), "producer should block while the queue is full"
    assert q.dequeue().id == 1
    assert done.wait(2.0)
    assert q.dequeue().id == 2
    t.join(1.0)


def test_blocked_consumer_wakes_on_close():
    q = TaskQueue()
    result = []

    t = threading.Thread(target=lambda: result.append(q.dequeue()), daemon=True)
    t.start()
    time.sleep(0.05)
    q.close()
    t.join(2.0)

    assert not t.is_alive()
    assert result == [None]


def test_blocked_producer_is_rejected_on_close():
    q = TaskQueue(capacity=1)
    q.enqueue(_task(1))
    errors = []

    def produce():
        try:
            q.enqueue(_task(2))
        except QueueClosedError as e:
            errors.append(e)

    t = threading.Thread(target=produce, daemon=True)
    t.start()
    time.sleep(0.05)
    q.close()
    t.join(2.0)

    assert len(errors) == 1
    assert [t.id for t in q] == [1]
