import logging

from fastapi import BackgroundTasks

from resume_builder.app.api.routes.route_logic.content_saver import ContentSaver
from resume_builder.app.api.routes.route_logic.editor_session import (
    EditorSession,
    EditorSessionRegistry,
)
from resume_builder.app.api.routes.route_logic.resume_reorder import ReorderResult
from resume_builder.app.models.content import parse_resume_content
from resume_builder.app.models.resume_model import Resume as DatabaseResume

log = logging.getLogger(__name__)


def open_editor_session(
    registry: EditorSessionRegistry,
    resume: DatabaseResume,
) -> EditorSession:
    """
    Start a new editing session from the stored resume.

    Args:
        registry (EditorSessionRegistry): The session registry.
        resume (DatabaseResume): The resume as stored.

    Returns:
        EditorSession: A fresh session. Any previous session for this resume is replaced.

    """
    content = parse_resume_content(resume.content)
    return registry.open(resume.id, content)


def get_or_open_editor_session(
    registry: EditorSessionRegistry,
    resume: DatabaseResume,
) -> EditorSession:
    """Return the live session for the resume, loading one from the store if none exists."""
    session = registry.get(resume.id)
    if session is None:
        _msg = f"No editor session for resume {resume.id}, loading from the store"
        log.debug(_msg)
        session = open_editor_session(registry, resume)
    return session


def handle_move(
    session: EditorSession,
    active_id: str,
    over_id: str,
    background_tasks: BackgroundTasks,
    saver: ContentSaver,
) -> ReorderResult:
    """
    Apply a completed drag and schedule the save.

    Args:
        session (EditorSession): The session being edited.
        active_id (str): The dragged section or item id.
        over_id (str): The id it was dropped on.
        background_tasks (BackgroundTasks): Runs the save after the response is sent.
        saver (ContentSaver): The persistence adapter.

    Returns:
        ReorderResult: The engine's result.

    Notes:
        1. The session's document is updated before the response is built, so the
           re-rendered editor and preview never wait on the store.
        2. A save is scheduled only when the document changed.
        3. The save's outcome is visible through the save indicator, not this response.

    """
    result = session.apply_move(active_id, over_id)
    if result.moved:
        session.mark_saving()
        background_tasks.add_task(session.save, saver)
    return result
