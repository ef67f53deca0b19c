import logging
from typing import Protocol

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from resume_builder.app.api.routes.route_logic.resume_crud import update_resume_content
from resume_builder.app.models.content import ResumeContent

log = logging.getLogger(__name__)


class ContentSaver(Protocol):
    """Stores a content document snapshot for a resume."""

    async def save(self, resume_id: int, content: ResumeContent) -> bool:
        """Store `content`. Returns True on success and False on failure; never raises."""
        ...


class DatabaseContentSaver:
    """
    Saves content documents through a fresh database session per call.

    Args:
        session_factory (sessionmaker[Session]): Creates the session each save uses.

    Notes:
        1. Each save opens and closes its own session, so it can run after the request
           that scheduled it has finished.
        2. The blocking database write runs in the threadpool, off the event loop.
        3. Saving the same document twice is harmless.
        4. Failures are logged and reported as False; no retry is attempted.

    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    async def save(self, resume_id: int, content: ResumeContent) -> bool:
        _msg = f"Saving content for resume {resume_id}"
        log.debug(_msg)

        db = self._session_factory()
        try:
            await run_in_threadpool(update_resume_content, db, resume_id, content)
        except (SQLAlchemyError, HTTPException) as e:
            db.rollback()
            _msg = f"Failed to save content for resume {resume_id}: {e}"
            log.exception(_msg)
            return False
        finally:
            db.close()

        _msg = f"Saved content for resume {resume_id}"
        log.debug(_msg)
        return True
