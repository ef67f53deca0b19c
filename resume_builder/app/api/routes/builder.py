import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Form
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from resume_builder.app.api.dependencies import get_content_saver, get_resume
from resume_builder.app.api.routes.html_fragments import (
    _generate_builder_html,
    _generate_save_indicator_html,
)
from resume_builder.app.api.routes.route_logic.builder_logic import (
    get_or_open_editor_session,
    handle_move,
    open_editor_session,
)
from resume_builder.app.api.routes.route_logic.content_saver import ContentSaver
from resume_builder.app.api.routes.route_logic.editor_session import (
    EditorSessionRegistry,
    get_editor_sessions,
)
from resume_builder.app.api.routes.route_logic.resume_records import load_record_pool
from resume_builder.app.api.routes.route_models import MoveRequest, MoveResponse
from resume_builder.app.core.templates import resolve_template_id
from resume_builder.app.database.database import get_db
from resume_builder.app.models.resume_model import Resume as DatabaseResume

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["builder"])


@router.get("/{resume_id}/builder", response_class=HTMLResponse)
async def open_builder(
    db: Session = Depends(get_db),
    resume: DatabaseResume = Depends(get_resume),
    sessions: EditorSessionRegistry = Depends(get_editor_sessions),
) -> HTMLResponse:
    """
    Open the builder for a resume.

    Args:
        db (Session): The database session dependency.
        resume (DatabaseResume): The resume, from dependency.
        sessions (EditorSessionRegistry): The editor session registry.

    Returns:
        HTMLResponse: The editor, the live preview and the save indicator.

    Notes:
        1. Loads the document from the store and starts a fresh editing session,
           replacing any previous one for this resume.
        2. Loads the record pool used for display.

    """
    session = open_editor_session(sessions, resume)
    pool = load_record_pool(db, session.content)
    return HTMLResponse(
        _generate_builder_html(resume, session, pool, resolve_template_id(resume.template_id))
    )


@router.post("/{resume_id}/builder/move", response_class=HTMLResponse)
async def move_in_builder(
    background_tasks: BackgroundTasks,
    active_id: str = Form(...),
    over_id: str = Form(...),
    db: Session = Depends(get_db),
    resume: DatabaseResume = Depends(get_resume),
    sessions: EditorSessionRegistry = Depends(get_editor_sessions),
    saver: ContentSaver = Depends(get_content_saver),
) -> HTMLResponse:
    """
    Apply a drag from the builder and re-render it.

    Args:
        background_tasks (BackgroundTasks): Runs the save after the response.
        active_id (str): The dragged section or item id.
        over_id (str): The section or item id it was dropped on.
        db (Session): The database session dependency.
        resume (DatabaseResume): The resume, from dependency.
        sessions (EditorSessionRegistry): The editor session registry.
        saver (ContentSaver): The persistence adapter.

    Returns:
        HTMLResponse: The re-rendered builder.

    Notes:
        1. The editor and preview are rendered from the new document immediately.
        2. Unknown or stale ids re-render the unchanged document and schedule no save.

    """
    session = get_or_open_editor_session(sessions, resume)
    handle_move(session, active_id, over_id, background_tasks, saver)
    pool = load_record_pool(db, session.content)
    return HTMLResponse(
        _generate_builder_html(resume, session, pool, resolve_template_id(resume.template_id))
    )


@router.post("/{resume_id}/move", response_model=MoveResponse)
async def move(
    request: MoveRequest,
    background_tasks: BackgroundTasks,
    resume: DatabaseResume = Depends(get_resume),
    sessions: EditorSessionRegistry = Depends(get_editor_sessions),
    saver: ContentSaver = Depends(get_content_saver),
) -> MoveResponse:
    """
    Apply a drag through the JSON API.

    Args:
        request (MoveRequest): The dragged id and the id it was dropped on.
        background_tasks (BackgroundTasks): Runs the save after the response.
        resume (DatabaseResume): The resume, from dependency.
        sessions (EditorSessionRegistry): The editor session registry.
        saver (ContentSaver): The persistence adapter.

    Returns:
        MoveResponse: Whether anything moved and the editor's document afterwards.

    """
    session = get_or_open_editor_session(sessions, resume)
    result = handle_move(
        session, request.active_id, request.over_id, background_tasks, saver
    )
    return MoveResponse(
        moved=result.moved,
        kind=result.kind.value if result.kind else None,
        reason=result.reason.value if result.reason else None,
        content=session.content.to_storage(),
        save_status=session.status.value,
    )


@router.post("/{resume_id}/builder/save", response_class=HTMLResponse)
async def save_builder(
    resume: DatabaseResume = Depends(get_resume),
    sessions: EditorSessionRegistry = Depends(get_editor_sessions),
    saver: ContentSaver = Depends(get_content_saver),
) -> HTMLResponse:
    """
    Save the editor's document again, e.g. after a failed save.

    Returns:
        HTMLResponse: The save indicator after the save completes.

    Notes:
        1. Saving the same document twice is harmless.

    """
    session = get_or_open_editor_session(sessions, resume)
    await session.save(saver)
    return HTMLResponse(_generate_save_indicator_html(session))


@router.get("/{resume_id}/builder/status", response_class=HTMLResponse)
async def builder_status(
    resume: DatabaseResume = Depends(get_resume),
    sessions: EditorSessionRegistry = Depends(get_editor_sessions),
) -> HTMLResponse:
    """Return the save indicator for the resume's editor session."""
    session = get_or_open_editor_session(sessions, resume)
    return HTMLResponse(_generate_save_indicator_html(session))
