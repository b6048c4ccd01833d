from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select, insert, delete
from ..models.game_category import game_categories
from ..models.game import Game
from ..models.category import Category


def attach_category(session: Session, game_id: int, category_id: int) -> bool:
    game = session.query(Game).filter_by(id=game_id).first()
    category = session.query(Category).filter_by(id=category_id).first()
    if not game or not category:
        return False

    exists = session.execute(
        select(game_categories).where(
            game_categories.c.game_id == game_id,
            game_categories.c.category_id == category_id,
        )
    ).first()

    if exists:
        return True

    session.execute(
        insert(game_categories).values(game_id=game_id, category_id=category_id)
    )
    game.updated_at = datetime.now(timezone.utc)
    session.commit()
    session.expire(game, ["categories"])
    return True


def detach_category(session: Session, game_id: int, category_id: int) -> bool:
    game = session.get(Game, game_id)
    result = session.execute(
        delete(game_categories).where(
            game_categories.c.game_id == game_id,
            game_categories.c.category_id == category_id,
        )
    )
    if result.rowcount and game is not None:
        game.updated_at = datetime.now(timezone.utc)
    session.commit()
    if game is not None:
        session.expire(game, ["categories"])
    return result.rowcount > 0


def list_categories_for_game(session: Session, game_id: int) -> list[Category]:
    return (
        session.query(Category)
        .join(game_categories, Category.id == game_categories.c.category_id)
        .filter(game_categories.c.game_id == game_id)
        .order_by(Category.name)
        .all()
    )
