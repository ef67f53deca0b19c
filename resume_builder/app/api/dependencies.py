import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from resume_builder.app.api.routes.route_logic.content_saver import (
    ContentSaver,
    DatabaseContentSaver,
)
from resume_builder.app.api.routes.route_logic.resume_crud import get_resume_by_id
from resume_builder.app.database.database import get_db, get_session_local
from resume_builder.app.models.resume_model import Resume as DatabaseResume

log = logging.getLogger(__name__)


async def get_resume(
    resume_id: int,
    db: Session = Depends(get_db),
) -> DatabaseResume:
    """
    Dependency to get a specific resume.

    Args:
        resume_id (int): The unique identifier of the resume to retrieve.
        db (Session): The database session dependency.

    Returns:
        DatabaseResume: The resume object if found.

    Raises:
        HTTPException: If the resume is not found (404).

    Notes:
        1. Ownership checks belong to the external auth layer in front of this service.

    """
    return get_resume_by_id(db, resume_id=resume_id)


def get_content_saver() -> ContentSaver:
    """
    Dependency to get the persistence adapter used by editor sessions.

    Returns:
        ContentSaver: A saver that opens its own database session per save.

    """
    return DatabaseContentSaver(session_factory=get_session_local())
