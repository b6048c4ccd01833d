from datetime import datetime
from pydantic import BaseModel, Field


class Category(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class CategoryWithCount(Category):
    game_count: int = 0


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
