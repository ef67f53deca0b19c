import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, String

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


class Position(Base):
    """A job held by the user, referenced from resume content by its id.

    Attributes:
        id (str): Unique identifier for the position (a UUID string).
        user_id (str): Identifier of the owning user.
        company (str): The employer.
        title (str): The job title.
        location (str | None): Where the job was based.
        start_date (date | None): First day in the role.
        end_date (date | None): Last day in the role, or None while current.

    """

    __tablename__ = "positions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, index=True, nullable=False)
    company = Column(String, nullable=False)
    title = Column(String, nullable=False)
    location = Column(String, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
