# tests/conftest.py
import time
from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from tasktracker.core.config import Settings
from tasktracker.db.session import create_db_engine
from tasktracker.main import create_app
from tasktracker.services.task_store import TaskStore

# Short enough to keep the suite fast, long enough to observe "pending".
PROCESSING_DELAY = 0.2


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture()
def settings(db_url: str) -> Settings:
    return Settings(
        database_url=db_url,
        queue_capacity=10,
        processing_delay_seconds=PROCESSING_DELAY,
        shutdown_grace_seconds=1.0,
    )


@pytest.fixture()
def store(db_url: str):
    s = TaskStore(create_db_engine(db_url))
    s.create_schema()
    yield s
    s.close()


@pytest.fixture()
def client(settings: Settings):
    # entering the client runs the lifespan: schema + worker thread
    with TestClient(create_app(settings)) as c:
        yield c


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0, interval: float = 0.02) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture()
def wait_for() -> Callable[..., bool]:
    return wait_until
