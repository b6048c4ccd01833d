from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Rating(BaseModel):
    game_id: int
    average_rating: float
    total_ratings: int
    updated_at: datetime

    class Config:
        from_attributes = True


class RecomputeSummary(BaseModel):
    updated: int
    cleared: int
    errors: int


class RatingRecompute(BaseModel):
    game_id: int
    rating: Optional[Rating] = None
