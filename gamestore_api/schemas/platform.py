from pydantic import BaseModel, Field


class Platform(BaseModel):
    id: int
    name: str
    code: str | None = None
    description: str | None = None

    class Config:
        from_attributes = True


class PlatformCreate(BaseModel):
    name: str = Field(..., min_length=1)
    code: str | None = Field(None, max_length=32)
    description: str | None = None


class PlatformUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    code: str | None = Field(None, max_length=32)
    description: str | None = None
