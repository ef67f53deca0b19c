import logging

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from resume_builder.app.models.content import (
    ResumeContent,
    create_default_resume_content,
    create_draft_resume_content,
)
from resume_builder.app.models.resume_model import (
    Resume as DatabaseResume,
)
from resume_builder.app.models.resume_model import (
    ResumeData,
)

log = logging.getLogger(__name__)


class ResumeCreateParams(BaseModel):
    """Parameters for creating a resume."""

    user_id: str
    name: str
    content: ResumeContent | None = None
    template_id: str | None = None


class ResumeUpdateParams(BaseModel):
    """Parameters for updating a resume."""

    name: str | None = None
    content: ResumeContent | None = None
    template_id: str | None = None


def get_resume_by_id(db: Session, resume_id: int) -> DatabaseResume:
    """Retrieve a resume by its ID.

    Args:
        db (Session): The SQLAlchemy database session used to query the database.
        resume_id (int): The unique identifier for the resume to retrieve.

    Returns:
        DatabaseResume: The resume object matching the provided ID.

    Raises:
        HTTPException: If no resume is found, raises a 404 error with detail "Resume not found".

    Notes:
        1. Query the DatabaseResume table for a record where the id matches resume_id.
        2. If no matching record is found, raise an HTTPException with status code 404.
        3. This function performs a single database query.

    """
    resume = db.query(DatabaseResume).filter(DatabaseResume.id == resume_id).first()

    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")

    return resume


def get_user_resumes(db: Session, user_id: str) -> list[DatabaseResume]:
    """Retrieve all resumes of a user, most recently updated first.

    Args:
        db (Session): The SQLAlchemy database session used to query the database.
        user_id (str): The identifier of the user whose resumes are to be retrieved.

    Returns:
        list[DatabaseResume]: The user's resumes ordered by `updated_at` descending.

    """
    return (
        db.query(DatabaseResume)
        .filter(DatabaseResume.user_id == user_id)
        .order_by(DatabaseResume.updated_at.desc())
        .all()
    )


def create_resume(db: Session, params: ResumeCreateParams) -> DatabaseResume:
    """Create and save a new resume.

    Args:
        db (Session): The database session.
        params (ResumeCreateParams): The parameters required to create the resume.

    Returns:
        DatabaseResume: The newly created resume object.

    Notes:
        1. Use the default Experience / Skills / Education content when none is given.
        2. Serialize the content to its stored JSON shape.
        3. Add, commit and refresh the instance so it carries its generated ID.
        4. This function performs a database write operation.

    """
    content = params.content or create_default_resume_content()
    resume_data = ResumeData(
        user_id=params.user_id,
        name=params.name,
        content=content.to_storage(),
        template_id=params.template_id,
    )
    resume = DatabaseResume(data=resume_data)
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def create_resume_from_draft(
    db: Session,
    user_id: str,
    name: str,
    bullet_ids: list[str],
) -> DatabaseResume:
    """Create a resume whose Experience section holds the given bullets.

    Args:
        db (Session): The database session.
        user_id (str): The owner of the new resume.
        name (str): The resume name.
        bullet_ids (list[str]): The bullets chosen for the draft, in order.

    Returns:
        DatabaseResume: The newly created resume object.

    """
    _msg = f"Creating resume {name!r} from draft with {len(bullet_ids)} bullets"
    log.debug(_msg)
    params = ResumeCreateParams(
        user_id=user_id,
        name=name,
        content=create_draft_resume_content(bullet_ids),
    )
    return create_resume(db, params)


def update_resume(
    db: Session,
    resume: DatabaseResume,
    params: ResumeUpdateParams,
) -> DatabaseResume:
    """Update a resume's name, content, and/or template.

    Args:
        db (Session): The database session.
        resume (DatabaseResume): The resume to update.
        params (ResumeUpdateParams): The new data for the resume.

    Returns:
        DatabaseResume: The updated resume object.

    Notes:
        1. Only fields that are not None are written.
        2. Content replaces the stored document wholesale; it is never merged.
        3. Commit the transaction and refresh the resume.
        4. This function performs a database write operation.

    """
    if params.name is not None:
        resume.name = params.name
    if params.content is not None:
        resume.content = params.content.to_storage()
    if params.template_id is not None:
        resume.template_id = params.template_id
    db.commit()
    db.refresh(resume)
    return resume


def update_resume_content(
    db: Session,
    resume_id: int,
    content: ResumeContent,
) -> DatabaseResume:
    """Store a content document for a resume.

    Args:
        db (Session): The database session.
        resume_id (int): The resume to write.
        content (ResumeContent): The document to store.

    Returns:
        DatabaseResume: The updated resume object.

    Raises:
        HTTPException: If the resume does not exist (404).

    Notes:
        1. Writing the same document twice leaves the row in the same state.

    """
    resume = get_resume_by_id(db, resume_id)
    return update_resume(db, resume, ResumeUpdateParams(content=content))


def delete_resume(db: Session, resume: DatabaseResume) -> None:
    """Delete a resume.

    Args:
        db (Session): The database session.
        resume (DatabaseResume): The resume to delete.

    Returns:
        None

    Notes:
        1. Delete the resume object from the database session.
        2. Commit the transaction to persist the deletion.

    """
    db.delete(resume)
    db.commit()
