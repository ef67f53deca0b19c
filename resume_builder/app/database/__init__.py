"""This module provides database configuration and session management for the application.

Functions:
    get_engine: Returns the lazily created SQLAlchemy engine for the configured database.
    get_session_local: Returns the SQLAlchemy session factory bound to that engine.

Notes:
    1. Both objects are created on first use so importing the package never opens a connection.
    2. The database URL comes from `app.core.config.get_settings`.

"""

from .database import get_engine, get_session_local

__all__ = ["get_engine", "get_session_local"]
