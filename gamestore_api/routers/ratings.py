from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.rating import RatingRecompute, RecomputeSummary
from ..utils.auth import get_current_admin
from ..utils.game import get_game
from ..utils.rating import recompute_rating, recompute_all_ratings

router = APIRouter(prefix="/admin/ratings", tags=["Ratings"], dependencies=[Depends(get_current_admin)])


@router.post("/recompute", response_model=RecomputeSummary)
def recompute_all(db: Session = Depends(get_db)):
    return recompute_all_ratings(db)


@router.post("/{game_id}/recompute", response_model=RatingRecompute)
def recompute_one(game_id: int, db: Session = Depends(get_db)):
    """
    Rebuild one game's rating. Unlike the moderation paths, a database
    failure here is reported as a 500.
    """
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    rating = recompute_rating(db, game_id)
    return {"game_id": game_id, "rating": rating}
