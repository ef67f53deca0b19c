import logging
from datetime import date
from typing import Protocol

from pydantic import BaseModel

log = logging.getLogger(__name__)


class PositionSummary(BaseModel):
    """
    The position context shown next to a bullet.

    Attributes:
        id (str): The position id.
        company (str): The employer.
        title (str): The job title.

    """

    id: str
    company: str
    title: str


class BulletRecord(BaseModel):
    """
    Display data for a bullet.

    Attributes:
        id (str): The bullet id.
        current_text (str): The text shown on the resume.
        category (str | None): A free-form grouping, if any.
        position (PositionSummary | None): The position the bullet belongs to, if any.

    """

    id: str
    current_text: str
    category: str | None = None
    position: PositionSummary | None = None


class PositionRecord(BaseModel):
    """
    Display data for a position.

    Attributes:
        id (str): The position id.
        company (str): The employer.
        title (str): The job title.
        start_date (date | None): First day in the role.
        end_date (date | None): Last day in the role, or None while current.

    """

    id: str
    company: str
    title: str
    start_date: date | None = None
    end_date: date | None = None


class RecordResolver(Protocol):
    """Looks up display records for the ids held in a content document."""

    def resolve_bullet(self, bullet_id: str) -> BulletRecord | None: ...

    def resolve_position(self, position_id: str) -> PositionRecord | None: ...


class RecordPool:
    """
    An in-memory record resolver keyed by id.

    Args:
        bullets (list[BulletRecord] | None): The bullet records available for rendering.
        positions (list[PositionRecord] | None): The position records available for rendering.

    Notes:
        1. An id without a record resolves to None; the caller renders nothing for it.
        2. When the same id is given twice, the last record wins.

    """

    def __init__(
        self,
        bullets: list[BulletRecord] | None = None,
        positions: list[PositionRecord] | None = None,
    ):
        self._bullets = {bullet.id: bullet for bullet in bullets or []}
        self._positions = {position.id: position for position in positions or []}

    @property
    def bullets(self) -> list[BulletRecord]:
        return list(self._bullets.values())

    @property
    def positions(self) -> list[PositionRecord]:
        return list(self._positions.values())

    def resolve_bullet(self, bullet_id: str) -> BulletRecord | None:
        record = self._bullets.get(bullet_id)
        if record is None:
            _msg = f"Bullet {bullet_id} not found in record pool"
            log.debug(_msg)
        return record

    def resolve_position(self, position_id: str) -> PositionRecord | None:
        record = self._positions.get(position_id)
        if record is None:
            _msg = f"Position {position_id} not found in record pool"
            log.debug(_msg)
        return record
