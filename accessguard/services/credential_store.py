"""
Credential store adapter.

Read access to principals with their roles and permissions eagerly loaded,
plus the durable append of audit records. Lookups distinguish a missing row
(NotFound) from a unique lookup that matched several rows (AmbiguousResult);
driver failures surface as StoreError and are never retried here.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union
from uuid import UUID

from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from accessguard.core.exceptions import AmbiguousResult, NotFound, StoreError
from accessguard.models import AuditRecord, Role, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditEntry:
    """Immutable audit fact, captured when the decision is made."""

    user_id: Optional[UUID]
    action: str
    resource: Optional[str]
    status: str
    timestamp: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class CredentialStore:
    """Engine-facing view of the users/roles/permissions tables."""

    def __init__(self, db: Session):
        self.db = db

    def _principal_query(self) -> Query:
        return self.db.query(User).options(
            selectinload(User.roles).selectinload(Role.permissions)
        )

    def _one(self, query: Query, label: str) -> User:
        try:
            return query.one()
        except NoResultFound as exc:
            raise NotFound(f"{label} not found") from exc
        except MultipleResultsFound as exc:
            raise AmbiguousResult(f"{label} is ambiguous") from exc
        except SQLAlchemyError as exc:
            logger.error("Credential store lookup failed for %s: %s", label, exc)
            raise StoreError("Credential store unavailable") from exc

    def find_principal_by_id(self, principal_id: Union[UUID, str]) -> User:
        """Principal with roles and each role's permissions preloaded."""
        if not isinstance(principal_id, UUID):
            try:
                principal_id = UUID(str(principal_id))
            except ValueError as exc:
                raise NotFound("Principal not found") from exc
        return self._one(
            self._principal_query().filter(User.id == principal_id), "Principal"
        )

    def find_principal_by_username(self, username: str) -> User:
        return self._one(
            self._principal_query().filter(User.username == username), "Principal"
        )

    def append_audit_record(self, entry: AuditEntry) -> AuditRecord:
        """Stage an audit row; the caller owns the commit."""
        record = AuditRecord(
            user_id=entry.user_id,
            action=entry.action,
            resource=entry.resource,
            status=entry.status,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            details=entry.details or None,
            timestamp=entry.timestamp,
        )
        try:
            self.db.add(record)
            self.db.flush()
        except SQLAlchemyError as exc:
            raise StoreError("Could not append audit record") from exc
        return record
