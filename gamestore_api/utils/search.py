from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..models.category import Category
from ..models.game import Game
from ..models.platform import Platform
from ..models.rating import Rating
from .app_config import get_or_create_query_limit
from .game import with_game_relations

SEARCH_SORTS = {"title", "newest", "rating"}


def _validate_sort(value: Optional[str]) -> str:
    sort = (value or "title").lower()
    if sort not in SEARCH_SORTS:
        raise ValueError(f"sort must be one of: {', '.join(sorted(SEARCH_SORTS))}")
    return sort


def search_games(
        db: Session,
        q: Optional[str] = None,
        category_id: Optional[int] = None,
        platform_id: Optional[int] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
) -> List[Game]:
    """
    Single-query catalog search.

    - q matches title or description, case-insensitive substring.
    - category_id / platform_id restrict to games linked to them; both
      filters are EXISTS subqueries, so they combine with AND and never
      duplicate rows.
    - sort: 'title' (default), 'newest', or 'rating' (highest first,
      unrated games last).
    """
    sort = _validate_sort(sort)
    query = with_game_relations(db.query(Game))

    text = (q or "").strip()
    if text:
        escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        query = query.filter(or_(
            func.lower(Game.title).like(pattern, escape="\\"),
            func.lower(Game.description).like(pattern, escape="\\"),
        ))

    if category_id is not None:
        query = query.filter(Game.categories.any(Category.id == category_id))

    if platform_id is not None:
        query = query.filter(Game.platforms.any(Platform.id == platform_id))

    if sort == "newest":
        query = query.order_by(Game.created_at.desc(), Game.id.desc())
    elif sort == "rating":
        query = query.outerjoin(Rating, Rating.game_id == Game.id).order_by(
            Rating.average_rating.is_(None),
            Rating.average_rating.desc(),
            func.lower(Game.title),
        )
    else:
        query = query.order_by(func.lower(Game.title), Game.id)

    if limit is None:
        limit = get_or_create_query_limit(db)

    return query.offset(offset).limit(limit).all()
