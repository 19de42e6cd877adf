from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ResourceBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=50, examples=["endpoint", "page"])
    path: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    is_active: bool = True


class ResourceCreate(ResourceBase):
    pass


class ResourceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    path: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class ResourceRead(ResourceBase):
    id: UUID

    model_config = {"from_attributes": True}


class ResourceListResponse(BaseModel):
    count: int
    resources: List[ResourceRead]
