import asyncio
import logging

import pytest
from helpers import layout_of, make_content

from resume_builder.app.api.routes.route_logic.editor_session import (
    EditorSession,
    EditorSessionRegistry,
    SaveStatus,
    get_editor_sessions,
)
from resume_builder.app.api.routes.route_logic.resume_reorder import NoOpReason


class RecordingSaver:
    """A saver that records each document it is given and returns a fixed result."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.saved = []

    async def save(self, resume_id, content):
        self.saved.append((resume_id, content))
        return self.succeed


class GatedSaver:
    """A saver whose calls block until the test releases them, in any order."""

    def __init__(self):
        self.gates = []

    async def save(self, resume_id, content):
        gate = asyncio.Event()
        result = {}
        self.gates.append((gate, result))
        await gate.wait()
        return result["succeed"]

    def release(self, index: int, succeed: bool):
        gate, result = self.gates[index]
        result["succeed"] = succeed
        gate.set()


class RaisingSaver:
    """A saver that fails with an unexpected exception instead of returning False."""

    async def save(self, resume_id, content):
        raise RuntimeError("connection reset")


@pytest.fixture
def session():
    return EditorSession(1, make_content({"s1": ["a", "b", "c"], "s2": []}))


def test_new_session_is_idle(session):
    assert session.status == SaveStatus.IDLE
    assert not session.has_unsaved_changes
    assert session.revision == 0


def test_apply_move_updates_document_immediately(session):
    """Test that a move replaces the in-memory document before any save."""
    result = session.apply_move("a", "s2")

    assert result.moved
    assert layout_of(session.content) == {"s1": ["b", "c"], "s2": ["a"]}
    assert session.has_unsaved_changes
    assert session.revision == 1
    assert session.status == SaveStatus.IDLE


def test_apply_move_noop_leaves_session_untouched(session):
    """Test that an ignored drop does not mark the session dirty."""
    before = session.content

    result = session.apply_move("missing", "s2")

    assert result.reason == NoOpReason.SOURCE_NOT_FOUND
    assert session.content is before
    assert not session.has_unsaved_changes
    assert session.revision == 0


def test_mark_saving(session):
    session.mark_saving()
    assert session.status == SaveStatus.SAVING


@pytest.mark.asyncio
async def test_save_success_clears_unsaved_changes(session):
    """Test that a successful save marks the session saved and clean."""
    saver = RecordingSaver()
    session.apply_move("a", "s2")

    assert await session.save(saver) is True

    assert session.status == SaveStatus.SAVED
    assert not session.has_unsaved_changes
    assert saver.saved == [(1, session.content)]


@pytest.mark.asyncio
async def test_save_failure_keeps_document_and_unsaved_flag(session, caplog):
    """Test that a failed save keeps the optimistic document and flags it unsaved."""
    saver = RecordingSaver(succeed=False)
    session.apply_move("a", "s2")
    moved = session.content

    with caplog.at_level(logging.WARNING):
        assert await session.save(saver) is False

    assert session.status == SaveStatus.FAILED
    assert session.has_unsaved_changes
    assert session.content is moved
    assert "save failed" in caplog.text


@pytest.mark.asyncio
async def test_save_with_raising_saver_marks_failure(session, caplog):
    """Test that a saver exception ends the save as FAILED instead of leaving it SAVING."""
    session.apply_move("a", "s2")
    moved = session.content

    with caplog.at_level(logging.ERROR):
        assert await session.save(RaisingSaver()) is False

    assert session.status == SaveStatus.FAILED
    assert session.has_unsaved_changes
    assert session.content is moved
    assert "connection reset" in caplog.text


@pytest.mark.asyncio
async def test_retry_after_failure(session):
    """Test that saving again after a failure resaves the same document."""
    session.apply_move("a", "s2")
    failing = RecordingSaver(succeed=False)
    await session.save(failing)

    working = RecordingSaver()
    await session.save(working)

    assert session.status == SaveStatus.SAVED
    assert not session.has_unsaved_changes
    assert failing.saved[0][1] is working.saved[0][1]


@pytest.mark.asyncio
async def test_move_during_save_keeps_unsaved_flag(session):
    """Test that a move made while a save is in flight stays flagged unsaved."""
    saver = GatedSaver()
    session.apply_move("a", "s2")

    task = asyncio.create_task(session.save(saver))
    await asyncio.sleep(0)
    session.apply_move("b", "s2")
    saver.release(0, succeed=True)
    await task

    assert session.status == SaveStatus.SAVED
    assert session.has_unsaved_changes


@pytest.mark.asyncio
async def test_stale_save_result_is_ignored(session):
    """Test that an older save finishing after a newer one cannot change the status."""
    saver = GatedSaver()
    session.apply_move("a", "s2")
    first = asyncio.create_task(session.save(saver))
    await asyncio.sleep(0)

    session.apply_move("b", "s2")
    second = asyncio.create_task(session.save(saver))
    await asyncio.sleep(0)

    saver.release(1, succeed=True)
    await second
    saver.release(0, succeed=False)
    await first

    assert session.status == SaveStatus.SAVED
    assert not session.has_unsaved_changes


def test_registry_open_get_close():
    registry = EditorSessionRegistry()
    content = make_content({"s1": []})

    session = registry.open(7, content)

    assert registry.get(7) is session
    assert session.content is content
    registry.close(7)
    assert registry.get(7) is None
    registry.close(7)


def test_registry_open_replaces_existing_session():
    """Test that opening a resume again discards the previous session."""
    registry = EditorSessionRegistry()
    first = registry.open(1, make_content({"s1": ["a"], "s2": []}))
    first.apply_move("a", "s2")
    assert first.has_unsaved_changes

    second = registry.open(1, make_content({"s1": ["a"]}))

    assert registry.get(1) is second
    assert second is not first
    assert not second.has_unsaved_changes


def test_get_editor_sessions_is_process_wide():
    assert get_editor_sessions() is get_editor_sessions()
