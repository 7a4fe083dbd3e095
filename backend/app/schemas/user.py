"""User Schemas — directory payloads and login."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserWrite(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=100, pattern=r"^[^@\s]+@[^@\s]+$")
    department: str = Field(min_length=1, max_length=50)
    role_id: int = Field(gt=0)

    @field_validator("name", "department")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty or whitespace")
        return v


class UserCreate(UserWrite):
    pass


class UserUpdate(UserWrite):
    is_active: bool = True


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    department: str
    role_id: int
    role: str | None = None
    is_active: bool
    created_at: datetime


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=1, max_length=200)
    role: str = Field(min_length=1, max_length=50)


class LoginResponse(BaseModel):
    """Authenticated user summary; the token is an opaque placeholder."""
    user: UserResponse
    token: str
