# tasktracker/core/config.py
"""Settings loaded from environment variables (+ optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv(override=False)

DEFAULT_DATABASE_URL = "sqlite:///./tasks.db"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name) or ""
    return [p.strip() for p in raw.split(",") if p.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL

    # pipeline
    queue_capacity: int = 10
    processing_delay_seconds: float = 5.0
    shutdown_grace_seconds: float = 5.0

    # server
    host: str = "0.0.0.0"
    port: int = 8081
    cors_allow_origins: List[str] = field(default_factory=list)

    # logging
    log_level: str = "INFO"
    log_file: str = ""

    @staticmethod
    def from_env() -> "Settings":
        # DATABASE_URL is resolved later by db.session.build_db_url, which also
        # knows how to compose one from POSTGRES_* variables.
        return Settings(
            database_url=_env("DATABASE_URL"),
            queue_capacity=max(1, _env_int("TASK_QUEUE_CAPACITY", 10)),
            processing_delay_seconds=max(0.0, _env_float("TASK_PROCESSING_DELAY", 5.0)),
            shutdown_grace_seconds=max(0.0, _env_float("SHUTDOWN_GRACE_SECONDS", 5.0)),
            host=_env("HOST", "0.0.0.0"),
            port=_env_int("PORT", 8081),
            cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS"),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_file=_env("LOG_FILE"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
