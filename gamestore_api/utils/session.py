import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ..models.admin import AdminUser
from ..models.admin_session import AdminSession
from .config import ACCESS_TOKEN_HOURS


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def create_session(db: Session, admin: AdminUser, hours: int = ACCESS_TOKEN_HOURS) -> AdminSession:
    now = datetime.now(timezone.utc)
    session = AdminSession(
        id=secrets.token_urlsafe(32),
        admin_id=admin.id,
        created_at=now,
        expires_at=now + timedelta(hours=hours),
    )
    db.add(session)
    db.commit()
    return session


def get_active_session(db: Session, session_id: str) -> Optional[AdminSession]:
    """
    Return the session if it exists and has not expired.
    Expired sessions are removed on sight.
    """
    session = db.query(AdminSession).filter_by(id=session_id).first()
    if not session:
        return None
    if _as_utc(session.expires_at) <= datetime.now(timezone.utc):
        db.delete(session)
        db.commit()
        return None
    return session


def delete_session(db: Session, session_id: str) -> bool:
    session = db.query(AdminSession).filter_by(id=session_id).first()
    if not session:
        return False
    db.delete(session)
    db.commit()
    return True


def purge_expired_sessions(db: Session) -> int:
    now = datetime.now(timezone.utc)
    expired = [s for s in db.query(AdminSession).all() if _as_utc(s.expires_at) <= now]
    for s in expired:
        db.delete(s)
    db.commit()
    return len(expired)
