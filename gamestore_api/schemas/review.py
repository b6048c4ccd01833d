from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Review(BaseModel):
    id: int
    game_id: int
    user_name: str
    rating: int
    review_text: str
    approved: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AdminReview(Review):
    game_title: Optional[str] = None


class ReviewCreate(BaseModel):
    """
    Public review submission. There is no "approved" field; every
    submitted review starts unapproved.
    """
    user_name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    review_text: str = Field(..., min_length=1)

    class Config:
        str_strip_whitespace = True


class ReviewSubmitted(BaseModel):
    review: Review
    message: str
    warning: Optional[str] = None


class ModerationResult(BaseModel):
    message: str
    review: Optional[Review] = None
    warning: Optional[str] = None


class ReviewStats(BaseModel):
    pending: int
    approved: int
    total: int
