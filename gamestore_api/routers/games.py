from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from ..db import get_db
from ..models.admin import AdminUser
from ..schemas.game import (
    Game as GameSchema,
    GameCreate,
    GameCreated,
    GameUpdate,
)
from ..schemas.category import Category as CategorySchema
from ..schemas.platform import Platform as PlatformSchema
from ..schemas.rating import Rating as RatingSchema
from ..utils.game import (
    get_game,
    list_games,
    create_game,
    update_game,
    delete_game,
)
from ..utils.game_category import attach_category, detach_category, list_categories_for_game
from ..utils.game_platform import attach_platform, detach_platform, list_platforms_for_game
from ..utils.rating import get_rating
from ..utils.auth import get_current_admin

router = APIRouter(prefix="/games", tags=["Games"])

STALE_RATING_WARNING = "Rating could not be recomputed; the displayed rating may be out of date."


@router.get("/", response_model=List[GameSchema])
def get_all_games(db: Session = Depends(get_db)):
    return list_games(db)


@router.get("/{game_id}", response_model=GameSchema)
def get_game_by_id(game_id: int, db: Session = Depends(get_db)):
    game = get_game(db, game_id)
    if not game:
        raise HTTPException(404, "Game not found")
    return game


@router.get("/{game_id}/rating", response_model=RatingSchema)
def get_game_rating(game_id: int, db: Session = Depends(get_db)):
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    rating = get_rating(db, game_id)
    if not rating:
        raise HTTPException(404, "No rating")
    return rating


@router.post("/", response_model=GameCreated)
def add_game(game: GameCreate, db: Session = Depends(get_db), admin: AdminUser = Depends(get_current_admin)):
    try:
        created, rating_ok = create_game(db, game.model_dump(), reviewer_name=admin.username)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {
        "game": created,
        "message": "Game added successfully",
        "warning": None if rating_ok else STALE_RATING_WARNING,
    }


@router.put("/{game_id}", response_model=GameSchema, dependencies=[Depends(get_current_admin)])
def edit_game(game_id: int, game: GameUpdate, db: Session = Depends(get_db)):
    try:
        updated = update_game(db, game_id, game.model_dump())
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not updated:
        raise HTTPException(404, "Game not found")
    return updated


@router.delete("/{game_id}", response_model=bool, dependencies=[Depends(get_current_admin)])
def remove_game(game_id: int, db: Session = Depends(get_db)):
    deleted = delete_game(db, game_id)
    if not deleted:
        raise HTTPException(404, "Game not found")
    return True


@router.get("/{game_id}/categories", response_model=List[CategorySchema])
def get_game_categories(game_id: int, db: Session = Depends(get_db)):
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    return list_categories_for_game(db, game_id)


@router.post("/{game_id}/categories/{category_id}", response_model=GameSchema,
             dependencies=[Depends(get_current_admin)])
def add_category_to_game(game_id: int, category_id: int, db: Session = Depends(get_db)):
    if not attach_category(db, game_id, category_id):
        raise HTTPException(404, "Game or category not found")
    return get_game(db, game_id)


@router.delete("/{game_id}/categories/{category_id}", response_model=GameSchema,
               dependencies=[Depends(get_current_admin)])
def remove_category_from_game(game_id: int, category_id: int, db: Session = Depends(get_db)):
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    detach_category(db, game_id, category_id)
    return get_game(db, game_id)


@router.get("/{game_id}/platforms", response_model=List[PlatformSchema])
def get_game_platforms(game_id: int, db: Session = Depends(get_db)):
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    return list_platforms_for_game(db, game_id)


@router.post("/{game_id}/platforms/{platform_id}", response_model=GameSchema,
             dependencies=[Depends(get_current_admin)])
def add_platform_to_game(game_id: int, platform_id: int, db: Session = Depends(get_db)):
    if not attach_platform(db, game_id, platform_id):
        raise HTTPException(404, "Game or platform not found")
    return get_game(db, game_id)


@router.delete("/{game_id}/platforms/{platform_id}", response_model=GameSchema,
               dependencies=[Depends(get_current_admin)])
def remove_platform_from_game(game_id: int, platform_id: int, db: Session = Depends(get_db)):
    if not get_game(db, game_id):
        raise HTTPException(404, "Game not found")
    detach_platform(db, game_id, platform_id)
    return get_game(db, game_id)
