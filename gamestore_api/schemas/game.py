from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, List
from .platform import Platform
from .category import Category


class Game(BaseModel):
    id: int
    title: str
    description: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    categories: List[Category] = Field(default_factory=list)
    platforms: List[Platform] = Field(default_factory=list)
    average_rating: Optional[float] = None
    total_ratings: Optional[int] = None

    class Config:
        from_attributes = True


class GameCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    category_ids: Optional[List[int]] = Field(default_factory=list)
    platform_ids: Optional[List[int]] = Field(default_factory=list)
    initial_rating: Optional[int] = Field(None, ge=1, le=5)


class GameUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    category_ids: Optional[List[int]] = None
    platform_ids: Optional[List[int]] = None


class GameCreated(BaseModel):
    game: Game
    message: str
    warning: Optional[str] = None


class SearchResults(BaseModel):
    results: List[Game]
    count: int
    query: Optional[str] = None
    category_id: Optional[int] = None
    platform_id: Optional[int] = None
