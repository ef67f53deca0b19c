import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from resume_builder.app.models.content import (
    BulletRecord,
    PositionRecord,
    ResumeContent,
)

log = logging.getLogger(__name__)


# Request/Response models
class ResumeCreateRequest(BaseModel):
    """Request model for creating a new resume.

    Attributes:
        user_id (str): The owner of the resume.
        name (str): The name of the resume.
        content (dict | None): The content document in its stored JSON shape, or None
            for the default sections.
        template_id (str | None): The preview template, or None for the default.

    """

    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    content: dict | None = None
    template_id: str | None = None


class DraftResumeCreateRequest(BaseModel):
    """Request model for creating a resume from a job draft.

    Attributes:
        user_id (str): The owner of the resume.
        name (str): The name of the resume.
        bullet_ids (list[str]): The chosen bullets, in order.

    """

    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    bullet_ids: list[str] = []


class TemplateUpdateRequest(BaseModel):
    """Request model for choosing a resume's preview template."""

    template_id: str


class ResumeResponse(BaseModel):
    """Response model for a resume in a list.

    Attributes:
        id (int): The unique identifier for the resume.
        name (str): The name of the resume.
        template_id (str | None): The chosen template.
        updated_at (datetime | None): When the resume was last changed.

    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    template_id: str | None = None
    updated_at: datetime | None = None


class ResumeDetailResponse(BaseModel):
    """Response model for a resume with its parsed content and the records it references.

    Attributes:
        id (int): The unique identifier for the resume.
        name (str): The name of the resume.
        template_id (str): The resolved template id.
        content (dict): The content document in its stored JSON shape.
        bullets (list[BulletRecord]): The bullet records the content references.
        positions (list[PositionRecord]): The position records the content references.

    """

    id: int
    name: str
    template_id: str
    content: dict
    bullets: list[BulletRecord]
    positions: list[PositionRecord]


class MoveRequest(BaseModel):
    """A completed drag: the dragged id and the id it was dropped on."""

    active_id: str
    over_id: str


class MoveResponse(BaseModel):
    """Response model for a move made through the JSON API.

    Attributes:
        moved (bool): Whether the document changed.
        kind (str | None): "section" or "item" when something moved.
        reason (str | None): Why nothing moved, for a no-op.
        content (dict): The editor's document after the drag.
        save_status (str): The session's save status when the response was built.

    """

    moved: bool
    kind: str | None = None
    reason: str | None = None
    content: dict
    save_status: str


class TemplateResponse(BaseModel):
    """A preview template offered in the selector."""

    id: str
    name: str
    description: str


def content_from_request(raw: dict) -> ResumeContent:
    """Validate client-supplied content. Raises pydantic's ValidationError on a bad shape."""
    return ResumeContent.model_validate(raw)
