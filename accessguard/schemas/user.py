from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class RoleSummary(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)


class UserCreate(UserBase):
    """Schema for administrative user creation."""
    password: str = Field(..., min_length=6, max_length=72)
    role_ids: List[UUID] = Field(default_factory=list)


class UserUpdate(BaseModel):
    """Partial update; ``role_ids`` replaces the full role set when given."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None
    role_ids: Optional[List[UUID]] = None


class UserRead(UserBase):
    """Schema for reading user data (never exposes the password hash)."""
    id: UUID
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    roles: List[RoleSummary] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ProfileRead(UserRead):
    """Current user, with effective permission keys for UI pre-checks."""
    permissions: List[str] = Field(default_factory=list)


class UserListResponse(BaseModel):
    count: int
    users: List[UserRead]
