import logging

from .db import engine
from .models import Base

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create any missing tables. Alembic owns schema changes in production;
    this is for local runs and fresh SQLite files.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables checked/created.")
