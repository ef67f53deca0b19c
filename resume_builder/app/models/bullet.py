import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


class Bullet(Base):
    """A single accomplishment line, referenced from resume content by its id.

    Attributes:
        id (str): Unique identifier for the bullet (a UUID string).
        user_id (str): Identifier of the owning user.
        position_id (str | None): The position this bullet was written for, if any.
        current_text (str): The text shown on the resume.
        category (str | None): A free-form grouping such as "Leadership".
        position (Position | None): The related position row.

    """

    __tablename__ = "bullets"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, index=True, nullable=False)
    position_id = Column(String, ForeignKey("positions.id"), nullable=True)
    current_text = Column(Text, nullable=False)
    category = Column(String, nullable=True)
    created_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    position = relationship("Position", lazy="joined")
