"""
Audit trail endpoints (read only). Records themselves are written by the
audit interceptor; nothing here creates, updates or deletes them.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from accessguard.api.deps import get_db
from accessguard.api.guards import AccessGuard, GuardedCall
from accessguard.core.config import settings
from accessguard.schemas.audit import AuditListResponse, AuditStats, AuditStatusValue
from accessguard.services.audit_log_service import AuditLogService

router = APIRouter()


@router.get("", response_model=AuditListResponse, summary="Search audit records")
async def list_audit_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=settings.AUDIT_PAGE_SIZE_MAX),
    action: Optional[str] = Query(None, description="Substring match on the action label"),
    status: Optional[AuditStatusValue] = Query(None),
    user_id: Optional[UUID] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    call: GuardedCall = Depends(AccessGuard("view_audit", "audit", permissions=["read:audit"])),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: AuditListResponse.model_validate(
            AuditLogService(db).search(
                page=page,
                limit=limit,
                action=action,
                status=status,
                user_id=user_id,
                start_date=start_date,
                end_date=end_date,
            )
        )
    )


@router.get("/stats", response_model=AuditStats, summary="Audit totals by status")
async def audit_stats(
    call: GuardedCall = Depends(
        AccessGuard("view_audit_stats", "audit", permissions=["read:audit"])
    ),
    db: Session = Depends(get_db),
):
    return call.run(lambda: AuditStats(**AuditLogService(db).stats()))
