from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.game import SearchResults
from ..utils.search import search_games

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("/", response_model=SearchResults)
def search(
        q: Optional[str] = Query(None, description="Partial title or description"),
        category_id: Optional[int] = Query(None, description="Only games in this category"),
        platform_id: Optional[int] = Query(None, description="Only games on this platform"),
        sort: Optional[str] = Query(None, description="title (default) | newest | rating"),
        limit: Optional[int] = Query(None, ge=1, le=500, description="Max number of results to return"),
        offset: int = Query(0, ge=0, description="How many results to skip (for pagination)"),
        db: Session = Depends(get_db),
):
    try:
        results = search_games(
            db,
            q=q,
            category_id=category_id,
            platform_id=platform_id,
            sort=sort,
            limit=limit,
            offset=offset,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "results": results,
        "count": len(results),
        "query": q,
        "category_id": category_id,
        "platform_id": platform_id,
    }
