import logging
from enum import Enum

from resume_builder.app.api.routes.route_logic.content_saver import ContentSaver
from resume_builder.app.api.routes.route_logic.resume_reorder import (
    ReorderResult,
    reorder,
)
from resume_builder.app.models.content import ResumeContent

log = logging.getLogger(__name__)


class SaveStatus(str, Enum):
    """
    The persistence state shown by the builder's save indicator.

    Attributes:
        IDLE (str): Nothing has been saved in this session yet.
        SAVING (str): A save is in flight.
        SAVED (str): The latest save succeeded.
        FAILED (str): The latest save failed; the editor still shows the unsaved document.
    """

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    FAILED = "failed"


class EditorSession:
    """
    The in-memory document of one resume being edited, and its save state.

    Args:
        resume_id (int): The resume this session edits.
        content (ResumeContent): The document as loaded from the store.

    Notes:
        1. Moves replace the document immediately, before any save completes.
        2. A failed save never rolls the document back. It leaves
           `has_unsaved_changes` set until a later save succeeds.
        3. Only the most recently started save may update the status; a slower, older
           save finishing late is ignored.

    """

    def __init__(self, resume_id: int, content: ResumeContent):
        self.resume_id = resume_id
        self.content = content
        self.status = SaveStatus.IDLE
        self.has_unsaved_changes = False
        self._revision = 0
        self._latest_save = 0

    @property
    def revision(self) -> int:
        """Counts the moves applied in this session."""
        return self._revision

    def apply_move(self, active_id: str, over_id: str) -> ReorderResult:
        """
        Apply a drag outcome to the in-memory document.

        Args:
            active_id (str): The dragged section or item id.
            over_id (str): The section or item id it was dropped on.

        Returns:
            ReorderResult: The engine's result. No-ops leave the session untouched.

        """
        result = reorder(self.content, active_id, over_id)
        if result.moved:
            self.content = result.content
            self._revision += 1
            self.has_unsaved_changes = True
            _msg = f"Resume {self.resume_id}: applied {result.kind.value} move, revision {self._revision}"
            log.debug(_msg)
        else:
            _msg = f"Resume {self.resume_id}: drop ignored ({result.reason.value})"
            log.debug(_msg)
        return result

    def mark_saving(self) -> None:
        """Show the indicator as saving for a save that is scheduled but not yet started."""
        self.status = SaveStatus.SAVING

    async def save(self, saver: ContentSaver) -> bool:
        """
        Save the current document.

        Args:
            saver (ContentSaver): The persistence adapter.

        Returns:
            bool: Whether the saver reported success.

        Notes:
            1. Snapshot the document and revision, then mark the session as saving.
            2. Await the saver. A saver that raises counts as a failed save.
            3. If a newer save started meanwhile, return without touching the status.
            4. On success, set SAVED and clear `has_unsaved_changes` unless a move
               happened after the snapshot was taken.
            5. On failure, set FAILED and keep `has_unsaved_changes`.

        """
        self._latest_save += 1
        save_number = self._latest_save
        snapshot = self.content
        snapshot_revision = self._revision
        self.status = SaveStatus.SAVING

        try:
            succeeded = await saver.save(self.resume_id, snapshot)
        except Exception as e:
            _msg = f"Resume {self.resume_id}: saver raised {e!r}"
            log.exception(_msg)
            succeeded = False

        if save_number != self._latest_save:
            _msg = f"Resume {self.resume_id}: save {save_number} superseded, ignoring its result"
            log.debug(_msg)
            return succeeded

        if succeeded:
            self.status = SaveStatus.SAVED
            if snapshot_revision == self._revision:
                self.has_unsaved_changes = False
        else:
            self.status = SaveStatus.FAILED
            self.has_unsaved_changes = True
            _msg = f"Resume {self.resume_id}: save failed, keeping unsaved changes in the editor"
            log.warning(_msg)
        return succeeded


class EditorSessionRegistry:
    """
    Holds one editor session per resume id.

    Notes:
        1. `open` always replaces an existing session: a load is never merged.
        2. The registry lives in process memory; sessions are not shared across workers.

    """

    def __init__(self):
        self._sessions: dict[int, EditorSession] = {}

    def open(self, resume_id: int, content: ResumeContent) -> EditorSession:
        session = EditorSession(resume_id, content)
        self._sessions[resume_id] = session
        _msg = f"Opened editor session for resume {resume_id}"
        log.debug(_msg)
        return session

    def get(self, resume_id: int) -> EditorSession | None:
        return self._sessions.get(resume_id)

    def close(self, resume_id: int) -> None:
        self._sessions.pop(resume_id, None)


_registry = EditorSessionRegistry()


def get_editor_sessions() -> EditorSessionRegistry:
    """Dependency returning the process-wide editor session registry."""
    return _registry
