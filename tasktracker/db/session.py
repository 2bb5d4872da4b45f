# tasktracker/db/session.py
import os
import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from urllib.parse import quote_plus

from sqlalchemy.engine import Engine, url as sa_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from tasktracker.core.config import DEFAULT_DATABASE_URL

log = logging.getLogger(__name__)


def _mask(url: str) -> str:
    """Mask the password for log output."""
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" in rest and ":" in rest.split("@", 1)[0]:
        creds, tail = rest.split("@", 1)
        user = creds.split(":", 1)[0]
        return f"{scheme}://{user}:***@{tail}"
    return url


def _strip_outer_quotes(s: str) -> str:
    if not s:
        return s
    if (s[0] == s[-1]) and s[0] in ("'", '"', "`"):
        return s[1:-1].strip()
    return s


def build_db_url(raw: Optional[str] = None) -> str:
    """
    Resolve the database URL.

    Order: explicit value -> POSTGRES_* variables -> local SQLite file.
    """
    url = _strip_outer_quotes((raw or "").strip())

    # Heroku/Render style URLs need an explicit driver.
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)

    if not url:
        host = os.getenv("POSTGRES_HOST", "").strip()
        port = os.getenv("POSTGRES_PORT", "5432").strip()
        db = os.getenv("POSTGRES_DB", "").strip()
        user = os.getenv("POSTGRES_USER", "").strip()
        pwd = os.getenv("POSTGRES_PASSWORD", "").strip()

        if host and db and user:
            # passwords with URL metacharacters must be encoded
            if any(ch in pwd for ch in "@:/?#"):
                pwd = quote_plus(pwd)
            url = f"postgresql+psycopg2://{user}:{pwd}@{host}:{port}/{db}"
        else:
            url = DEFAULT_DATABASE_URL

    try:
        sa_url.make_url(url)
    except Exception as e:
        raise RuntimeError(f"invalid DATABASE_URL: {url!r} ({e})") from e

    log.info("DB URL: %s", _mask(url))
    return url


def create_db_engine(database_url: str) -> Engine:
    """
    Build the engine shared by request threads and the completion worker.

    SQLite connections are handed across threads, so the same-thread check is
    disabled; an in-memory database must live on a single connection.
    """
    url = sa_url.make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=1800,  # 30 minutes
        pool_size=5,
        max_overflow=5,
    )


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Short-lived session; one per store call."""
    s = Session(engine, expire_on_commit=False)
    try:
        yield s
    finally:
        s.close()
