from sqlalchemy.orm import Session
from ..models.platform import Platform
from typing import Optional


def _code_taken(session: Session, code: str, exclude_id: Optional[int] = None) -> bool:
    query = session.query(Platform).filter(Platform.code == code)
    if exclude_id is not None:
        query = query.filter(Platform.id != exclude_id)
    return session.query(query.exists()).scalar()


def _normalize_code(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    code = code.strip().lower()
    return code or None


def get_platform(session: Session, platform_id: int) -> Optional[Platform]:
    return session.query(Platform).filter_by(id=platform_id).first()


def list_platforms(session: Session) -> list[Platform]:
    return session.query(Platform).order_by(Platform.name).all()


def create_platform(session: Session, platform_data: dict) -> Platform:
    """
    Create a platform. platform_data: 'name' and optional 'code'/'description'.
    Codes are stored lowercase and must be unique.
    """
    code = _normalize_code(platform_data.get("code"))
    if code and _code_taken(session, code):
        raise ValueError(f"Platform code '{code}' already exists")

    platform = Platform(
        name=platform_data["name"].strip(),
        code=code,
        description=platform_data.get("description"),
    )
    session.add(platform)
    session.commit()
    session.refresh(platform)
    return platform


def update_platform(session: Session, platform_id: int, platform_data: dict) -> Optional[Platform]:
    platform = get_platform(session, platform_id)
    if not platform:
        return None

    if platform_data.get("name") is not None:
        platform.name = platform_data["name"].strip()

    if platform_data.get("code") is not None:
        code = _normalize_code(platform_data["code"])
        if code and _code_taken(session, code, exclude_id=platform_id):
            raise ValueError(f"Platform code '{code}' already exists")
        platform.code = code

    if platform_data.get("description") is not None:
        platform.description = platform_data["description"]

    session.commit()
    return platform


def delete_platform(session: Session, platform_id: int) -> bool:
    platform = get_platform(session, platform_id)
    if not platform:
        return False
    session.delete(platform)
    session.commit()
    return True
