from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, computed_field


class PermissionBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    action: str = Field(..., min_length=1, max_length=50, examples=["read"])
    resource: str = Field(..., min_length=1, max_length=100, examples=["users"])
    description: Optional[str] = None
    resource_id: Optional[UUID] = None


class PermissionCreate(PermissionBase):
    pass


class PermissionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    action: Optional[str] = Field(None, min_length=1, max_length=50)
    resource: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    resource_id: Optional[UUID] = None


class PermissionRead(PermissionBase):
    id: UUID

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def key(self) -> str:
        return f"{self.action}:{self.resource}"


class PermissionListResponse(BaseModel):
    count: int
    permissions: List[PermissionRead]
