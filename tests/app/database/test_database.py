from unittest.mock import MagicMock, patch

import pytest

from resume_builder.app.database import database


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Each test starts without a cached engine or session factory."""
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_SessionLocal", None)


@patch("resume_builder.app.database.database.create_engine")
@patch("resume_builder.app.database.database.get_settings")
def test_get_engine_is_created_once(mock_get_settings, mock_create_engine):
    """Test that the engine is created lazily from settings and then reused."""
    mock_get_settings.return_value = MagicMock(
        sqlalchemy_url="sqlite://", sql_echo=True
    )

    first = database.get_engine()
    second = database.get_engine()

    assert first is second
    mock_create_engine.assert_called_once_with(
        "sqlite://", echo=True, connect_args={"check_same_thread": False}
    )


def test_engine_options_for_postgres():
    options = database._engine_options("postgresql://u@localhost:5432/db", echo=False)

    assert options == {"echo": False, "pool_pre_ping": True}


@patch("resume_builder.app.database.database.get_engine")
def test_get_session_local_is_cached(mock_get_engine):
    mock_get_engine.return_value = MagicMock()

    factory = database.get_session_local()

    assert database.get_session_local() is factory
    assert factory.kw["expire_on_commit"] is False
    mock_get_engine.assert_called_once()


@patch("resume_builder.app.database.database.get_session_local")
def test_get_db_closes_session(mock_get_session_local):
    """Test that the session yielded by get_db is closed afterwards."""
    mock_session = MagicMock()
    mock_get_session_local.return_value = MagicMock(return_value=mock_session)

    generator = database.get_db()
    assert next(generator) is mock_session
    with pytest.raises(StopIteration):
        next(generator)

    mock_session.close.assert_called_once()
