"""
Read side of the audit trail: filtered, paginated listing and status totals.
"""
import math
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from accessguard.models import AuditRecord, User
from accessguard.services.audit_logger import AuditStatus


class AuditLogService:
    def __init__(self, db: Session):
        self.db = db

    def search(
        self,
        page: int = 1,
        limit: int = 50,
        action: Optional[str] = None,
        status: Optional[str] = None,
        user_id: Optional[UUID] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Newest-first page of audit records matching the filters."""
        query = self.db.query(AuditRecord, User).outerjoin(
            User, AuditRecord.user_id == User.id
        )
        if action:
            query = query.filter(AuditRecord.action.ilike(f"%{action}%"))
        if status:
            query = query.filter(AuditRecord.status == status)
        if user_id:
            query = query.filter(AuditRecord.user_id == user_id)
        if start_date:
            query = query.filter(AuditRecord.timestamp >= start_date)
        if end_date:
            query = query.filter(AuditRecord.timestamp <= end_date)

        total = query.count()
        rows = (
            query.order_by(AuditRecord.timestamp.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        logs = []
        for record, user in rows:
            logs.append(
                {
                    "id": record.id,
                    "user_id": record.user_id,
                    "user": (
                        {"id": user.id, "username": user.username, "email": user.email}
                        if user
                        else None
                    ),
                    "action": record.action,
                    "resource": record.resource,
                    "status": record.status,
                    "ip_address": record.ip_address,
                    "user_agent": record.user_agent,
                    "details": record.details,
                    "timestamp": record.timestamp,
                }
            )

        return {
            "logs": logs,
            "pagination": {
                "total": total,
                "page": page,
                "limit": limit,
                "pages": math.ceil(total / limit) if limit else 0,
            },
        }

    def stats(self) -> Dict[str, int]:
        counts = dict(
            self.db.query(AuditRecord.status, func.count(AuditRecord.id))
            .group_by(AuditRecord.status)
            .all()
        )
        return {
            "total_logs": sum(counts.values()),
            "success_logs": counts.get(AuditStatus.SUCCESS.value, 0),
            "failed_logs": counts.get(AuditStatus.FAILED.value, 0),
            "denied_logs": counts.get(AuditStatus.DENIED.value, 0),
        }
