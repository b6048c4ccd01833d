from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.review import Review as ReviewSchema, ReviewCreate, ReviewSubmitted
from ..utils.game import get_game
from ..utils.review import create_review, list_approved_reviews

router = APIRouter(prefix="/games/{game_id}/reviews", tags=["Reviews"])


@router.get("/", response_model=List[ReviewSchema])
def get_game_reviews(game_id: int, db: Session = Depends(get_db)):
    """
    Approved reviews for a game, newest first.
    """
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    return list_approved_reviews(db, game_id)


@router.post("/", response_model=ReviewSubmitted)
def submit_review(game_id: int, payload: ReviewCreate, db: Session = Depends(get_db)):
    review, _ = create_review(
        db,
        game_id,
        user_name=payload.user_name,
        rating=payload.rating,
        review_text=payload.review_text,
    )
    if not review:
        raise HTTPException(404, "Game not found")
    return {
        "review": review,
        "message": "Review submitted! It will be visible after approval.",
    }
