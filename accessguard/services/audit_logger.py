"""
Audit interceptor.

Wraps protected operations so that each terminal outcome produces exactly one
audit record, and offers a direct ``record`` entry point for call sites such
as login where the outcome is known up front.

Records are written fire-and-forget: the write is handed to a scheduler (in
HTTP requests, FastAPI's BackgroundTasks) and runs in its own session. A
failing write is logged and dropped; it never reaches the caller and is not
retried.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from accessguard.core.exceptions import AuthError
from accessguard.services.credential_store import AuditEntry, CredentialStore

logger = logging.getLogger(__name__)

Scheduler = Callable[..., None]


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    DENIED = "denied"


@dataclass(frozen=True)
class Outcome:
    """Explicit result of a protected operation."""

    status_code: int
    value: Any = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None, status_code: int = 200) -> "Outcome":
        return cls(status_code=status_code, value=value)

    @classmethod
    def failure(cls, status_code: int, message: str) -> "Outcome":
        return cls(status_code=status_code, message=message)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class AuditContext:
    """Request metadata attached to every record written for one request."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


def classify_outcome(result: Any) -> AuditStatus:
    """Map an operation result (or the exception it raised) to an audit status."""
    if isinstance(result, AuthError):
        return AuditStatus.DENIED
    if isinstance(result, BaseException):
        return AuditStatus.FAILED
    if isinstance(result, Outcome):
        return AuditStatus.SUCCESS if result.ok else AuditStatus.FAILED
    raise TypeError(f"Cannot classify {type(result).__name__} as an audit outcome")


def _run_inline(fn: Callable[..., None], *args: Any) -> None:
    fn(*args)


class AuditInterceptor:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        scheduler: Optional[Scheduler] = None,
        context: Optional[AuditContext] = None,
    ):
        self._session_factory = session_factory
        self._schedule = scheduler or _run_inline
        self.context = context or AuditContext()

    def wrap(
        self,
        action: str,
        resource: Optional[str],
        principal,
        operation: Callable[[], Any],
        details: Optional[Dict[str, Any]] = None,
    ) -> Outcome:
        """
        Run ``operation`` and record its outcome exactly once.

        The operation should return an ``Outcome``; any other return value is
        treated as a successful 200 result. Exceptions are recorded
        (``denied`` for AuthError, ``failed`` otherwise) and re-raised.
        """
        actor_id = principal.id if principal is not None else None
        details = dict(details or {})

        try:
            result = operation()
        except Exception as exc:
            status = classify_outcome(exc)
            details["error"] = type(exc).__name__
            if isinstance(exc, AuthError):
                details["reason"] = exc.reason
            self.record(actor_id, action, resource, status, details)
            raise

        outcome = result if isinstance(result, Outcome) else Outcome.success(result)
        details["status_code"] = outcome.status_code
        self.record(actor_id, action, resource, classify_outcome(outcome), details)
        return outcome

    def record(
        self,
        actor_id: Optional[UUID],
        action: str,
        resource: Optional[str],
        status: AuditStatus,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Schedule one audit record; best effort, never raises."""
        entry = AuditEntry(
            user_id=actor_id,
            action=action,
            resource=resource,
            status=AuditStatus(status).value,
            timestamp=datetime.now(timezone.utc),
            ip_address=self.context.ip_address,
            user_agent=self.context.user_agent,
            details={**self.context.details, **(details or {})},
        )
        try:
            self._schedule(self._write, entry)
        except Exception:
            logger.exception("Audit scheduling failed | action=%s", action)

    def _write(self, entry: AuditEntry) -> None:
        db = None
        try:
            db = self._session_factory()
            CredentialStore(db).append_audit_record(entry)
            db.commit()
        except Exception:
            logger.exception(
                "FAILED TO AUDIT LOG | action=%s | resource=%s | status=%s",
                entry.action,
                entry.resource,
                entry.status,
            )
        finally:
            # close() also rolls back a failed transaction
            if db is not None:
                db.close()
