from typing import Any
from jose import jwt, JWTError
from fastapi import HTTPException
from sqlalchemy.orm import Session
from .app_config import get_or_create_secret_key
from .config import ALGORITHM


def create_access_token(db: Session, payload: dict) -> str:
    secret_key = get_or_create_secret_key(db)
    return jwt.encode(payload, secret_key, algorithm=ALGORITHM)


def decode_access_token(db: Session, token: str) -> dict[str, Any]:
    secret_key = get_or_create_secret_key(db)
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
