from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.review import AdminReview, ModerationResult, ReviewStats
from ..utils.auth import get_current_admin
from ..utils.review import approve_review, delete_review, list_reviews, count_reviews_by_status
from .games import STALE_RATING_WARNING

router = APIRouter(
    prefix="/admin/reviews",
    tags=["Review moderation"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/", response_model=List[AdminReview])
def get_reviews(
        status: str = Query("all", description="all | pending | approved"),
        sort: str = Query("newest", description="newest | oldest | highest | lowest"),
        db: Session = Depends(get_db),
):
    try:
        return list_reviews(db, status=status.lower(), sort=sort.lower())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/stats", response_model=ReviewStats)
def get_review_stats(db: Session = Depends(get_db)):
    return count_reviews_by_status(db)


@router.post("/{review_id}/approve", response_model=ModerationResult)
def approve(review_id: int, db: Session = Depends(get_db)):
    review, changed, rating_ok = approve_review(db, review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return {
        "message": "Review approved successfully" if changed else "Review was already approved",
        "review": review,
        "warning": None if rating_ok else STALE_RATING_WARNING,
    }


@router.delete("/{review_id}", response_model=ModerationResult)
def reject(review_id: int, db: Session = Depends(get_db)):
    deleted, rating_ok = delete_review(db, review_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Review not found")
    return {
        "message": "Review deleted successfully",
        "warning": None if rating_ok else STALE_RATING_WARNING,
    }
