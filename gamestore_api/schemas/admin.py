from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class PasswordChangeRequest(BaseModel):
    """
    Request body for POST /auth/change-password
    """
    current_password: str
    new_password: str = Field(
        ...,
        min_length=6,
        description="New admin password (min length: 6 characters)",
    )


class AdminInfo(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True
