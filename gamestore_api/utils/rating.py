"""
Rating aggregation for games.

A game's Rating row is a cache of its approved reviews: the mean of their
ratings and how many there are. It is rebuilt from scratch on every call,
never adjusted incrementally, so a recompute after any sequence of
approvals and deletions lands on the same values.

Callers commit their own review change first and then call
refresh_game_rating(). A failed recompute leaves the Rating stale; it
never undoes the review change that triggered it.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.game import Game
from ..models.rating import Rating
from ..models.review import Review

logger = logging.getLogger(__name__)


def get_rating(session: Session, game_id: int) -> Optional[Rating]:
    return session.query(Rating).filter_by(game_id=game_id).first()


def recompute_rating(session: Session, game_id: int) -> Optional[Rating]:
    """
    Rebuild the Rating row for a game from its approved reviews.
    Returns the Rating, or None when the game has no approved reviews
    (any existing row is removed in that case).
    """
    scores = [
        value
        for (value,) in session.query(Review.rating)
        .filter(Review.game_id == game_id, Review.approved.is_(True))
        .all()
    ]
    rating = get_rating(session, game_id)

    if not scores:
        if rating:
            session.delete(rating)
            session.commit()
            logger.info(f"Rating cleared for game {game_id} (no approved reviews)")
        _expire_game_rating(session, game_id)
        return None

    average = sum(scores) / len(scores)
    now = datetime.now(timezone.utc)

    if rating:
        rating.average_rating = average
        rating.total_ratings = len(scores)
        rating.updated_at = now
    else:
        rating = Rating(game_id=game_id, average_rating=average, total_ratings=len(scores), updated_at=now)
        session.add(rating)

    session.commit()
    _expire_game_rating(session, game_id)
    logger.debug(f"Rating for game {game_id}: average={average} total={len(scores)}")
    return rating


def refresh_game_rating(session: Session, game_id: int) -> bool:
    """
    Recompute a game's rating without letting a database error escape.
    Returns True on success, False if the recompute failed and the stored
    rating may now be stale.
    """
    try:
        recompute_rating(session, game_id)
        return True
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(f"Rating recompute failed for game {game_id}; stored rating may be stale: {e}")
        return False


def recompute_all_ratings(session: Session) -> Dict[str, int]:
    """
    Recompute the rating of every game.
    Returns summary: {updated: int, cleared: int, errors: int}
    """
    updated, cleared, errors = 0, 0, 0
    game_ids = [gid for (gid,) in session.query(Game.id).order_by(Game.id).all()]

    for game_id in game_ids:
        try:
            if recompute_rating(session, game_id):
                updated += 1
            else:
                cleared += 1
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Rating recompute failed for game {game_id}: {e}")
            errors += 1

    logger.info(f"Batch rating recompute: updated={updated}, cleared={cleared}, errors={errors}")
    return {"updated": updated, "cleared": cleared, "errors": errors}


def _expire_game_rating(session: Session, game_id: int) -> None:
    # Game.rating may already be loaded in this session; force a reload.
    game = session.get(Game, game_id)
    if game is not None:
        session.expire(game, ["rating"])
