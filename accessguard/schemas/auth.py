"""
Authentication schemas for AccessGuard
"""
from pydantic import BaseModel, EmailStr, Field

from accessguard.schemas.user import ProfileRead, UserRead


class RegisterRequest(BaseModel):
    """Schema for self-registration."""
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    full_name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """Schema for username/password login."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Authentication response with token and user."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: ProfileRead


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    user: UserRead


class MessageResponse(BaseModel):
    message: str
