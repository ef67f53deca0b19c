import logging

from sqlalchemy.orm import Session

from resume_builder.app.models.bullet import Bullet
from resume_builder.app.models.content import (
    BulletRecord,
    PositionRecord,
    PositionSummary,
    RecordPool,
    ResumeContent,
)
from resume_builder.app.models.position import Position

log = logging.getLogger(__name__)


def bullet_to_record(bullet: Bullet) -> BulletRecord:
    """Convert a bullet row, with its joined position, to a display record."""
    position = None
    if bullet.position is not None:
        position = PositionSummary(
            id=bullet.position.id,
            company=bullet.position.company,
            title=bullet.position.title,
        )
    return BulletRecord(
        id=bullet.id,
        current_text=bullet.current_text,
        category=bullet.category,
        position=position,
    )


def position_to_record(position: Position) -> PositionRecord:
    """Convert a position row to a display record."""
    return PositionRecord(
        id=position.id,
        company=position.company,
        title=position.title,
        start_date=position.start_date,
        end_date=position.end_date,
    )


def load_record_pool(db: Session, content: ResumeContent) -> RecordPool:
    """
    Load the display records referenced by a content document.

    Args:
        db (Session): The database session.
        content (ResumeContent): The document whose references should be resolved.

    Returns:
        RecordPool: A pool holding every bullet and position the document references and the store knows.

    Notes:
        1. Collect bullet ids and position ids from the document.
        2. Query each table once, only when there is at least one id to look up.
        3. Ids with no row are left out; they render as nothing.
        4. This function performs up to two database reads.

    """
    bullet_ids = content.bullet_ids()
    position_ids = content.position_ids()

    bullets: list[BulletRecord] = []
    if bullet_ids:
        rows = db.query(Bullet).filter(Bullet.id.in_(bullet_ids)).all()
        bullets = [bullet_to_record(row) for row in rows]

    positions: list[PositionRecord] = []
    if position_ids:
        rows = db.query(Position).filter(Position.id.in_(position_ids)).all()
        positions = [position_to_record(row) for row in rows]

    missing = (len(bullet_ids) - len(bullets)) + (len(position_ids) - len(positions))
    if missing:
        _msg = f"{missing} references in resume content have no record"
        log.info(_msg)

    return RecordPool(bullets=bullets, positions=positions)
