from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException

from resume_builder.app.api.dependencies import get_content_saver, get_resume
from resume_builder.app.api.routes.route_logic.content_saver import (
    DatabaseContentSaver,
)


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.get_resume_by_id")
async def test_get_resume(mock_get_resume_by_id):
    mock_db = MagicMock()
    mock_resume = MagicMock()
    mock_get_resume_by_id.return_value = mock_resume

    result = await get_resume(resume_id=3, db=mock_db)

    assert result is mock_resume
    mock_get_resume_by_id.assert_called_once_with(mock_db, resume_id=3)


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.get_resume_by_id")
async def test_get_resume_not_found(mock_get_resume_by_id):
    mock_get_resume_by_id.side_effect = HTTPException(status_code=404)

    with pytest.raises(HTTPException):
        await get_resume(resume_id=3, db=MagicMock())


@patch("resume_builder.app.api.dependencies.get_session_local")
def test_get_content_saver(mock_get_session_local):
    """Test that the saver opens sessions from the application session factory."""
    factory = MagicMock()
    mock_get_session_local.return_value = factory

    saver = get_content_saver()

    assert isinstance(saver, DatabaseContentSaver)
    assert saver._session_factory is factory
