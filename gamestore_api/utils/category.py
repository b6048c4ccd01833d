from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.category import Category
from ..models.game_category import game_categories


def _name_taken(session: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    query = session.query(Category).filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return session.query(query.exists()).scalar()


def get_category(session: Session, category_id: int) -> Optional[Category]:
    return session.query(Category).filter_by(id=category_id).first()


def list_categories(session: Session) -> List[Tuple[Category, int]]:
    """
    Return all categories sorted by name, each paired with its game count.
    """
    return (
        session.query(Category, func.count(game_categories.c.game_id))
        .outerjoin(game_categories, Category.id == game_categories.c.category_id)
        .group_by(Category.id)
        .order_by(func.lower(Category.name))
        .all()
    )


def create_category(session: Session, name: str, description: Optional[str] = None) -> Category:
    name = name.strip()
    if _name_taken(session, name):
        raise ValueError(f"Category '{name}' already exists")
    category = Category(name=name, description=(description or "").strip() or None)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


def update_category(session: Session, category_id: int, update_data: dict) -> Optional[Category]:
    category = get_category(session, category_id)
    if not category:
        return None

    name = update_data.get("name")
    if name is not None:
        name = name.strip()
        if _name_taken(session, name, exclude_id=category_id):
            raise ValueError(f"Category '{name}' already exists")
        category.name = name

    if "description" in update_data and update_data["description"] is not None:
        category.description = update_data["description"].strip() or None

    session.commit()
    return category


def delete_category(session: Session, category_id: int) -> bool:
    category = get_category(session, category_id)
    if not category:
        return False
    session.delete(category)
    session.commit()
    return True
