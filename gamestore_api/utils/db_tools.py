from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from ..db import SessionLocal


@contextmanager
def with_db() -> Iterator[Session]:
    """
    Open a DB session outside FastAPI's Depends() (startup tasks, scripts).
    Rolls back on error and always closes.

        with with_db() as db:
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
