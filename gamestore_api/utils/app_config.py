from sqlalchemy.orm import Session
from typing import Optional
import secrets
from ..models.app_config import AppConfig
from .config import QUERY_LIMIT


def set_app_config_value(db: Session, key: str, value: str, commit: bool = True) -> AppConfig:
    entry = db.query(AppConfig).filter_by(key=key).first()
    if entry:
        entry.value = value
    else:
        entry = AppConfig(key=key, value=value)
        db.add(entry)
    if commit:
        db.commit()
    return entry


def get_app_config_value(db: Session, key: str) -> Optional[str]:
    entry = db.query(AppConfig).filter_by(key=key).first()
    return entry.value if entry else None


def get_or_create_secret_key(db: Session) -> str:
    key = "SECRET_KEY"
    value = get_app_config_value(db, key)
    if value:
        return value
    generated = secrets.token_urlsafe(64)
    set_app_config_value(db, key, generated)
    return generated

def get_or_create_query_limit(db: Session, default: int = QUERY_LIMIT) -> int:
    key = "QUERY_LIMIT"
    value = get_app_config_value(db, key)
    try:
        return int(value)
    except (TypeError, ValueError):
        set_app_config_value(db, key, str(default))
        return default
