from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from ..models import game_categories, game_platforms
from ..models.category import Category
from ..models.game import Game
from ..models.platform import Platform
from .review import create_review

INITIAL_RATING_TEXT = "Initial rating"


def with_game_relations(query):
    return query.options(
        selectinload(Game.categories),
        selectinload(Game.platforms),
        selectinload(Game.rating),
    )


def get_game(session: Session, game_id: int) -> Optional[Game]:
    return with_game_relations(session.query(Game)).filter_by(id=game_id).first()


def list_games(session: Session) -> List[Game]:
    return with_game_relations(session.query(Game)).order_by(func.lower(Game.title), Game.id).all()


def _load_categories(session: Session, category_ids: List[int]) -> List[Category]:
    categories = session.query(Category).filter(Category.id.in_(category_ids)).all()
    missing = set(category_ids) - {c.id for c in categories}
    if missing:
        raise ValueError(f"Unknown category id(s): {sorted(missing)}")
    return categories


def _load_platforms(session: Session, platform_ids: List[int]) -> List[Platform]:
    platforms = session.query(Platform).filter(Platform.id.in_(platform_ids)).all()
    missing = set(platform_ids) - {p.id for p in platforms}
    if missing:
        raise ValueError(f"Unknown platform id(s): {sorted(missing)}")
    return platforms


def create_game(session: Session, game_data: dict, reviewer_name: str = "admin") -> Tuple[Game, bool]:
    """
    Create a game with its category/platform links.
    If game_data carries an initial_rating, an approved review is stored
    for it and the game's rating is computed.
    Returns (game, rating_ok). Raises ValueError for unknown category or
    platform ids.
    """
    category_ids = game_data.pop("category_ids", None) or []
    platform_ids = game_data.pop("platform_ids", None) or []
    initial_rating = game_data.pop("initial_rating", None)

    categories = _load_categories(session, category_ids) if category_ids else []
    platforms = _load_platforms(session, platform_ids) if platform_ids else []

    game = Game(**game_data)
    game.categories = categories
    game.platforms = platforms
    session.add(game)
    session.commit()
    session.refresh(game)

    rating_ok = True
    if initial_rating is not None:
        _, rating_ok = create_review(
            session,
            game.id,
            user_name=reviewer_name,
            rating=initial_rating,
            review_text=INITIAL_RATING_TEXT,
            approved=True,
        )

    return get_game(session, game.id), rating_ok


def update_game(session: Session, game_id: int, update_data: dict) -> Optional[Game]:
    game = session.query(Game).filter_by(id=game_id).first()
    if not game:
        return None

    category_ids = update_data.pop("category_ids", None)
    platform_ids = update_data.pop("platform_ids", None)
    categories = _load_categories(session, category_ids) if category_ids else []
    platforms = _load_platforms(session, platform_ids) if platform_ids else []

    if category_ids is not None:
        game.categories = categories
    if platform_ids is not None:
        game.platforms = platforms

    for key, value in update_data.items():
        if value is not None:
            setattr(game, key, value)

    # onupdate does not fire for association-only changes
    game.updated_at = datetime.now(timezone.utc)
    session.commit()
    return get_game(session, game_id)


def delete_game(session: Session, game_id: int) -> bool:
    """
    Delete a game by its ID, together with its reviews and rating.
    Returns True if deleted, False if not found.
    """
    game = session.query(Game).filter_by(id=game_id).first()
    if not game:
        return False
    session.delete(game)
    session.commit()
    return True


def list_games_by_category(session: Session, category_id: int) -> List[Game]:
    """
    Return all games associated with a given category ID.
    """
    return (
        with_game_relations(session.query(Game))
        .join(game_categories, Game.id == game_categories.c.game_id)
        .filter(game_categories.c.category_id == category_id)
        .order_by(func.lower(Game.title))
        .all()
    )


def list_games_by_platform(session: Session, platform_id: int) -> List[Game]:
    """
    Return all games associated with a given platform ID.
    """
    return (
        with_game_relations(session.query(Game))
        .join(game_platforms, Game.id == game_platforms.c.game_id)
        .filter(game_platforms.c.platform_id == platform_id)
        .order_by(func.lower(Game.title))
        .all()
    )
