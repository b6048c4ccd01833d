from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.category import Category as CategorySchema, CategoryCreate, CategoryUpdate, CategoryWithCount
from ..schemas.game import Game as GameSchema
from ..utils.auth import get_current_admin
from ..utils.category import (
    get_category,
    list_categories,
    create_category,
    update_category,
    delete_category,
)
from ..utils.game import list_games_by_category

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("/", response_model=List[CategoryWithCount])
def get_all_categories(db: Session = Depends(get_db)):
    return [
        CategoryWithCount(
            id=c.id,
            name=c.name,
            description=c.description,
            created_at=c.created_at,
            game_count=count,
        )
        for c, count in list_categories(db)
    ]


@router.get("/{category_id}", response_model=CategorySchema)
def get_category_by_id(category_id: int, db: Session = Depends(get_db)):
    category = get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("/{category_id}/games", response_model=List[GameSchema])
def get_category_games(category_id: int, db: Session = Depends(get_db)):
    if not get_category(db, category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return list_games_by_category(db, category_id)


@router.post("/", response_model=CategorySchema, dependencies=[Depends(get_current_admin)])
def add_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    try:
        return create_category(db, payload.name, payload.description)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{category_id}", response_model=CategorySchema, dependencies=[Depends(get_current_admin)])
def edit_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    try:
        category = update_category(db, category_id, payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}", dependencies=[Depends(get_current_admin)])
def remove_category(category_id: int, db: Session = Depends(get_db)):
    if not delete_category(db, category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category deleted successfully."}
