import logging

from fastapi import APIRouter, HTTPException, Depends, Request, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.admin import LoginRequest, PasswordChangeRequest, AdminInfo
from ..utils.auth import get_current_admin, verify_password, hash_password
from ..models.admin import AdminUser
from ..utils.config import ACCESS_TOKEN_HOURS, AUTH_COOKIE_NAME, COOKIE_SECURE
from ..utils.jwt import create_access_token
from ..utils.rate_limit import client_ip
from ..utils.session import create_session, delete_session, purge_expired_sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login")
def login(request: Request, response: Response, creds: LoginRequest, db: Session = Depends(get_db)):
    ip = client_ip(request)
    throttle = request.app.state.login_throttle
    throttle.check(ip, creds.username)

    user = db.query(AdminUser).filter_by(username=creds.username).first()
    if not user or not verify_password(creds.password, user.password_hash):
        throttle.note_fail(ip, creds.username)
        logger.info(f"Failed login for '{creds.username}' from {ip or 'unknown'}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    throttle.note_success(ip, creds.username)
    purge_expired_sessions(db)
    session = create_session(db, user)

    payload = {
        "sub": str(user.id),
        "username": user.username,
        "role": "admin",
        "sid": session.id,
        "exp": session.expires_at,
    }
    token = create_access_token(db, payload)

    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=ACCESS_TOKEN_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=COOKIE_SECURE,
        path="/",
    )
    return {"access_token": token, "token_type": "bearer"}


@router.post("/logout")
def logout(
        request: Request,
        response: Response,
        admin: AdminUser = Depends(get_current_admin),
        db: Session = Depends(get_db),
):
    """
    Revoke the current server-side session and clear the auth cookie.
    """
    delete_session(db, request.state.session_id)
    response.delete_cookie(AUTH_COOKIE_NAME, path="/")
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=AdminInfo)
def who_am_i(admin: AdminUser = Depends(get_current_admin)):
    return admin


@router.post("/change-password")
def change_password(
        data: PasswordChangeRequest,
        admin: AdminUser = Depends(get_current_admin),
        db: Session = Depends(get_db),
):
    """
    Change the admin's password.
    - Verifies current password against stored hash.
    - Enforces minimum length of 6 characters for new password (via Pydantic model).
    - On success, hashes and persists the new password.
    """
    if not verify_password(data.current_password, admin.password_hash):
        raise HTTPException(status_code=401, detail="Incorrect current password")

    admin.password_hash = hash_password(data.new_password)
    db.add(admin)
    db.commit()

    return {"message": "Password changed successfully."}
