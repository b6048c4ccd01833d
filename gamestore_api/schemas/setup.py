from pydantic import BaseModel, Field


class FirstRunRequest(BaseModel):
    admin_username: str = Field(..., min_length=3)
    admin_password: str = Field(..., min_length=6)
    query_limit: int = Field(50, ge=1, le=500)
