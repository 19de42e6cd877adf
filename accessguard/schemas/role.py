from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from accessguard.schemas.permission import PermissionRead


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = None
    level: int = Field(default=0, ge=0)
    permission_ids: List[UUID] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    """Partial update; ``permission_ids`` replaces the full permission set when given."""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = None
    level: Optional[int] = Field(None, ge=0)
    permission_ids: Optional[List[UUID]] = None


class RoleMember(BaseModel):
    id: UUID
    username: str
    email: str
    full_name: str

    model_config = {"from_attributes": True}


class RoleRead(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    level: int
    created_at: Optional[datetime] = None
    permissions: List[PermissionRead] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class RoleDetail(RoleRead):
    users: List[RoleMember] = Field(default_factory=list)


class RoleListResponse(BaseModel):
    count: int
    roles: List[RoleRead]
