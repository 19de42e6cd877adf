from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

AuditStatusValue = Literal["success", "failed", "denied"]


class AuditActor(BaseModel):
    id: UUID
    username: str
    email: str


class AuditRecordRead(BaseModel):
    id: UUID
    user_id: Optional[UUID] = None
    user: Optional[AuditActor] = None
    action: str
    resource: Optional[str] = None
    status: AuditStatusValue
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime

    model_config = {"from_attributes": True}


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class AuditListResponse(BaseModel):
    logs: List[AuditRecordRead]
    pagination: Pagination


class AuditStats(BaseModel):
    total_logs: int = Field(..., description="All audit records")
    success_logs: int
    failed_logs: int
    denied_logs: int
