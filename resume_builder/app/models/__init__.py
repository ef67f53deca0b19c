import logging

from sqlalchemy.orm import declarative_base

log = logging.getLogger(__name__)

# Base model that other models will inherit from
Base = declarative_base()

# Import all models here to ensure they are registered with SQLAlchemy's metadata
from .bullet import Bullet  # noqa
from .position import Position  # noqa
from .resume_model import Resume  # noqa
