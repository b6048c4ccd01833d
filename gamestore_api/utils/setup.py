from sqlalchemy.orm import Session
from ..models.admin import AdminUser
from ..utils.auth import hash_password
from ..utils.app_config import get_app_config_value, set_app_config_value


def perform_first_run_setup(
        db: Session,
        admin_username: str,
        admin_password: str,
        query_limit: int,
) -> None:
    if get_app_config_value(db, "is_firstrun_done") == "true":
        raise ValueError("Setup already completed")

    existing = db.query(AdminUser).filter_by(username=admin_username).first()
    if existing:
        raise ValueError("Admin user already exists")

    hashed_pw = hash_password(admin_password)
    db.add(AdminUser(username=admin_username, password_hash=hashed_pw))

    set_app_config_value(db, "QUERY_LIMIT", str(query_limit), commit=False)
    set_app_config_value(db, "is_firstrun_done", "true", commit=False)

    db.commit()


def is_first_run_done(db: Session) -> bool:
    """
    Returns True if initial setup has been completed, otherwise False.
    Treat any non-'true' value (including None) as False.
    """
    value = get_app_config_value(db, "is_firstrun_done")
    return (value or "").lower() == "true"
