import logging
from datetime import date

from sqlalchemy.orm import Session

from resume_builder.app.api.routes.route_logic.resume_crud import (
    ResumeCreateParams,
    create_resume,
)
from resume_builder.app.models.bullet import Bullet
from resume_builder.app.models.content import (
    BulletReference,
    PositionReference,
    ResumeContent,
    ResumeSection,
)
from resume_builder.app.models.position import Position
from resume_builder.app.models.resume_model import Resume as DatabaseResume

log = logging.getLogger(__name__)

DEMO_BULLETS = [
    ("Cut checkout latency 40% by moving pricing to a cached read model", "Performance"),
    ("Led a team of five through a zero-downtime database migration", "Leadership"),
    ("Built the CI pipeline that now gates every merge", "Tooling"),
]


def seed_demo_resume(db: Session, user_id: str) -> DatabaseResume:
    """
    Create a position, bullets and a resume that references them.

    Args:
        db (Session): The database session.
        user_id (str): The owner of the demo records.

    Returns:
        DatabaseResume: The created resume.

    Notes:
        1. Create one position and three bullets belonging to it.
        2. Create a resume with the position and bullets in Experience and empty
           Skills and Education sections.
        3. This function performs database writes.

    """
    position = Position(
        user_id=user_id,
        company="Acme Corp",
        title="Senior Engineer",
        start_date=date(2021, 3, 1),
    )
    db.add(position)
    db.flush()

    bullets = [
        Bullet(
            user_id=user_id,
            position_id=position.id,
            current_text=text,
            category=category,
        )
        for text, category in DEMO_BULLETS
    ]
    db.add_all(bullets)
    db.flush()

    content = ResumeContent(
        sections=(
            ResumeSection(
                id="experience",
                title="Experience",
                items=(
                    PositionReference(position_id=position.id),
                    *(BulletReference(bullet_id=bullet.id) for bullet in bullets),
                ),
            ),
            ResumeSection(id="skills", title="Skills"),
            ResumeSection(id="education", title="Education"),
        )
    )
    _msg = f"Seeding demo resume for user {user_id}"
    log.info(_msg)
    return create_resume(
        db,
        ResumeCreateParams(user_id=user_id, name="Demo Resume", content=content),
    )
