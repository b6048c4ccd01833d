from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from ..models.game import Game
from ..models.review import Review
from .rating import refresh_game_rating

REVIEW_STATUSES = {"all", "pending", "approved"}
REVIEW_SORTS = {"newest", "oldest", "highest", "lowest"}


def get_review(session: Session, review_id: int) -> Optional[Review]:
    return session.query(Review).filter_by(id=review_id).first()


def list_approved_reviews(session: Session, game_id: int) -> List[Review]:
    return (
        session.query(Review)
        .filter(Review.game_id == game_id, Review.approved.is_(True))
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def list_reviews(session: Session, status: str = "all", sort: str = "newest") -> List[Review]:
    """
    Moderation listing. status: all | pending | approved,
    sort: newest | oldest | highest | lowest.
    """
    if status not in REVIEW_STATUSES:
        raise ValueError(f"status must be one of: {', '.join(sorted(REVIEW_STATUSES))}")
    if sort not in REVIEW_SORTS:
        raise ValueError(f"sort must be one of: {', '.join(sorted(REVIEW_SORTS))}")

    query = session.query(Review).options(joinedload(Review.game))

    if status == "pending":
        query = query.filter(Review.approved.is_(False))
    elif status == "approved":
        query = query.filter(Review.approved.is_(True))

    if sort == "oldest":
        query = query.order_by(Review.created_at.asc(), Review.id.asc())
    elif sort == "highest":
        query = query.order_by(Review.rating.desc(), Review.created_at.desc())
    elif sort == "lowest":
        query = query.order_by(Review.rating.asc(), Review.created_at.desc())
    else:
        query = query.order_by(Review.created_at.desc(), Review.id.desc())

    return query.all()


def create_review(
        session: Session,
        game_id: int,
        user_name: str,
        rating: int,
        review_text: str,
        approved: bool = False,
) -> Tuple[Optional[Review], bool]:
    """
    Store a review for a game.
    Returns (review, rating_ok). review is None if the game does not exist.
    rating_ok is False only when the review was approved and the rating
    recompute that followed it failed.
    """
    game = session.query(Game).filter_by(id=game_id).first()
    if not game:
        return None, True

    review = Review(
        game_id=game_id,
        user_name=user_name.strip(),
        rating=rating,
        review_text=review_text.strip(),
        approved=approved,
    )
    session.add(review)
    session.commit()
    session.refresh(review)

    rating_ok = True
    if review.approved:
        rating_ok = refresh_game_rating(session, game_id)
    return review, rating_ok


def approve_review(session: Session, review_id: int) -> Tuple[Optional[Review], bool, bool]:
    """
    Mark a review approved.
    Returns (review, changed, rating_ok). Approving an already approved
    review changes nothing and skips the recompute.
    """
    review = get_review(session, review_id)
    if not review:
        return None, False, True
    if review.approved:
        return review, False, True

    review.approved = True
    session.commit()

    rating_ok = refresh_game_rating(session, review.game_id)
    return review, True, rating_ok


def delete_review(session: Session, review_id: int) -> Tuple[bool, bool]:
    """
    Delete a review (moderation rejection).
    Returns (deleted, rating_ok). Only deleting an approved review touches
    the game's rating.
    """
    review = get_review(session, review_id)
    if not review:
        return False, True

    game_id = review.game_id
    was_approved = bool(review.approved)
    session.delete(review)
    session.commit()

    rating_ok = True
    if was_approved:
        rating_ok = refresh_game_rating(session, game_id)
    return True, rating_ok


def count_reviews_by_status(session: Session) -> dict:
    pending = session.query(Review).filter(Review.approved.is_(False)).count()
    approved = session.query(Review).filter(Review.approved.is_(True)).count()
    return {"pending": pending, "approved": approved, "total": pending + approved}
