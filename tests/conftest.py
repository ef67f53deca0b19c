from datetime import date

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from resume_builder.app.api.dependencies import get_content_saver
from resume_builder.app.api.routes.route_logic.content_saver import (
    DatabaseContentSaver,
)
from resume_builder.app.api.routes.route_logic.editor_session import (
    EditorSessionRegistry,
    get_editor_sessions,
)
from resume_builder.app.core.config import get_settings
from resume_builder.app.database.database import get_db
from resume_builder.app.main import create_app
from resume_builder.app.models import Base
from resume_builder.app.models.bullet import Bullet
from resume_builder.app.models.position import Position


@pytest.fixture
def db_session_factory():
    """An in-memory SQLite database shared across threads, with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
    yield SessionLocal
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(db_session_factory):
    """A database session for direct use in tests."""
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def records(db):
    """A position and three bullets stored in the database."""
    position = Position(
        id="p1",
        user_id="user-1",
        company="Acme Corp",
        title="Senior Engineer",
        start_date=date(2021, 3, 1),
    )
    db.add(position)
    db.add_all(
        [
            Bullet(
                id="b1",
                user_id="user-1",
                position_id="p1",
                current_text="Cut checkout latency 40%",
                category="Performance",
            ),
            Bullet(
                id="b2",
                user_id="user-1",
                position_id="p1",
                current_text="Led a zero-downtime migration",
                category="Leadership",
            ),
            Bullet(
                id="b3",
                user_id="user-1",
                current_text="Built the CI pipeline",
            ),
        ]
    )
    db.commit()
    return db


@pytest.fixture
def sessions() -> EditorSessionRegistry:
    """A fresh editor session registry per test."""
    return EditorSessionRegistry()


@pytest.fixture
def app(db_session_factory, sessions) -> FastAPI:
    """Fixture to create a new app for each test, wired to the in-memory database."""
    get_settings.cache_clear()
    _app = create_app()

    def get_test_db():
        session = db_session_factory()
        try:
            yield session
        finally:
            session.close()

    _app.dependency_overrides[get_db] = get_test_db
    _app.dependency_overrides[get_editor_sessions] = lambda: sessions
    _app.dependency_overrides[get_content_saver] = lambda: DatabaseContentSaver(
        session_factory=db_session_factory
    )
    yield _app
    _app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Fixture to create a test client for each test."""
    with TestClient(app) as c:
        yield c
