# tasktracker/core/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


class _AccessNoiseFilter(logging.Filter):
    """Keep uvicorn's per-request access lines out of the console unless DEBUG."""

    def __init__(self, console_level: int) -> None:
        super().__init__()
        self._console_level = console_level

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "uvicorn.access":
            return self._console_level <= logging.DEBUG
        return True


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger:
    - console handler on stderr at `level`
    - optional file handler that records everything (DEBUG)

    Call once, before the server starts. uvicorn is started with
    log_config=None so its loggers propagate here.
    """
    console_level = getattr(logging, str(level).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if log_file else console_level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_AccessNoiseFilter(console_level))
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)

    # SQL echo is never wanted at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
