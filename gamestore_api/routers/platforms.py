from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..db import get_db
from ..schemas.game import Game as GameSchema
from ..schemas.platform import Platform as PlatformSchema, PlatformCreate, PlatformUpdate
from ..utils.auth import get_current_admin
from ..utils.game import list_games_by_platform
from ..utils.platform import get_platform, list_platforms, create_platform, update_platform, delete_platform

router = APIRouter(prefix="/platforms", tags=["Platforms"])

@router.get("/", response_model=list[PlatformSchema])
def get_all_platforms(db: Session = Depends(get_db)):
    return list_platforms(db)

@router.get("/{platform_id}", response_model=PlatformSchema)
def get_platform_by_id(platform_id: int, db: Session = Depends(get_db)):
    platform = get_platform(db, platform_id)
    if not platform:
        raise HTTPException(status_code=404, detail="Platform not found")
    return platform

@router.get("/{platform_id}/games", response_model=list[GameSchema])
def get_platform_games(platform_id: int, db: Session = Depends(get_db)):
    if not get_platform(db, platform_id):
        raise HTTPException(status_code=404, detail="Platform not found")
    return list_games_by_platform(db, platform_id)

@router.post("/", response_model=PlatformSchema, dependencies=[Depends(get_current_admin)])
def add_platform(payload: PlatformCreate, db: Session = Depends(get_db)):
    try:
        return create_platform(db, payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{platform_id}", response_model=PlatformSchema, dependencies=[Depends(get_current_admin)])
def edit_platform(platform_id: int, payload: PlatformUpdate, db: Session = Depends(get_db)):
    try:
        platform = update_platform(db, platform_id, payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not platform:
        raise HTTPException(status_code=404, detail="Platform not found")
    return platform

@router.delete("/{platform_id}", dependencies=[Depends(get_current_admin)])
def remove_platform(platform_id: int, db: Session = Depends(get_db)):
    if not delete_platform(db, platform_id):
        raise HTTPException(status_code=404, detail="Platform not found")
    return {"message": "Platform deleted successfully."}
