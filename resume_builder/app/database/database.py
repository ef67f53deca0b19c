import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from resume_builder.app.core.config import get_settings

log = logging.getLogger(__name__)

_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _engine_options(url: str, echo: bool) -> dict[str, Any]:
    """
    Build the `create_engine` keyword arguments for a database URL.

    Args:
        url (str): The SQLAlchemy URL.
        echo (bool): Whether to log every SQL statement.

    Returns:
        dict[str, Any]: Engine options.

    Notes:
        1. Content saves run after the request that scheduled them, possibly on another
           thread, so SQLite connections must not be pinned to the creating thread.
        2. Server databases get `pool_pre_ping` so a save never fails on a stale connection.

    """
    options: dict[str, Any] = {"echo": echo}
    if make_url(url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.sqlalchemy_url
        _msg = f"Creating database engine for backend {make_url(url).get_backend_name()}"
        log.debug(_msg)
        _engine = create_engine(url, **_engine_options(url, settings.sql_echo))
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """
    Return the session factory bound to the engine.

    Returns:
        sessionmaker[Session]: The factory used by request handlers and content savers.

    Notes:
        1. Sessions keep loaded attributes after commit, so a resume returned by a CRUD
           helper can still be rendered once its session is closed.

    """
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=get_engine(),
        )
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Yields:
        Session: A session that is closed when the request finishes.

    """
    db = get_session_local()()
    try:
        yield db
    finally:
        _msg = "Closing request database session"
        log.debug(_msg)
        db.close()
