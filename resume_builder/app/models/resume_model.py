import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


@dataclass
class ResumeData:
    """Dataclass to hold data for Resume initialization."""

    user_id: str
    name: str
    content: dict[str, Any] = field(default_factory=dict)
    template_id: str | None = None


class Resume(Base):
    """Resume model for storing a user's resume document.

    Attributes:
        id (int): Unique identifier for the resume.
        user_id (str): Identifier of the owning user, issued by the external auth provider.
        name (str): User-assigned descriptive name for the resume.
        content (dict): The content document as JSON: ordered sections of ordered
            bullet/position references. It never holds copies of bullet or position records.
        template_id (str | None): The preview template chosen for this resume, or None for the default.
        created_at (datetime): Timestamp when the resume was created.
        updated_at (datetime): Timestamp when the resume was last updated.

    """

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    content = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False)
    template_id = Column(String, nullable=True)
    created_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __init__(self, data: ResumeData):
        """Initialize a Resume instance.

        Args:
            data (ResumeData): An object containing the data for the new resume.

        Returns:
            None

        Notes:
            1. Assigns attributes from the `data` object to the `Resume` instance.
            2. The content is stored as given; callers serialize it with
               `ResumeContent.to_storage()` first.
            3. This function does not perform disk, network, or database access.

        """
        _msg = f"Initializing Resume with name: {data.name}"
        log.debug(_msg)

        self.user_id = data.user_id
        self.name = data.name
        self.content = data.content
        self.template_id = data.template_id
