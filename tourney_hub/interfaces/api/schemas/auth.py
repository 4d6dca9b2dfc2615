"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field

from .user import UserRead


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Username or email address")
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)


class SessionResponse(BaseModel):
    user: UserRead
    access_token: str
    token_type: str = "bearer"


__all__ = ["LoginRequest", "RegisterRequest", "SessionResponse"]
