from typing import Optional

from passlib.context import CryptContext
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..models.admin import AdminUser
from ..db import get_db
from .config import AUTH_COOKIE_NAME
from .jwt import decode_access_token
from .session import get_active_session

security_optional = HTTPBearer(auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """
    Bearer header wins; otherwise fall back to the HttpOnly auth cookie.
    """
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(AUTH_COOKIE_NAME) or None


def get_current_admin(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
        db: Session = Depends(get_db)
) -> AdminUser:
    token = extract_token(request, credentials)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = decode_access_token(db, token)

    user_id = payload.get("sub")
    role = payload.get("role")
    session_id = payload.get("sid")

    if role != "admin":
        raise HTTPException(status_code=403, detail="Not an admin")

    if not user_id:
        raise HTTPException(status_code=401, detail="Missing user ID")

    session = get_active_session(db, session_id) if session_id else None
    if not session or session.admin_id != int(user_id):
        raise HTTPException(status_code=401, detail="Session expired or revoked")

    user = db.query(AdminUser).filter_by(id=int(user_id)).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.session_id = session_id
    return user


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)
