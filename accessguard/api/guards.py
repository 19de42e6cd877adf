"""
=============================================================================
ACCESSGUARD - ROUTE GUARDS
=============================================================================
Composes the engine for FastAPI routes:

    token -> Authenticator -> policy (permissions XOR roles) -> operation

Every terminal state of a guarded call produces exactly one audit record:
- authentication rejected   -> denied (actor NULL), raised before the handler
- principal lookup failed   -> failed (actor NULL), raised before the handler
- policy rejected           -> denied (actor = principal), raised before the handler
- operation ran             -> success / failed via AuditInterceptor.wrap

Usage:
    @router.get("/")
    async def list_users(
        call: GuardedCall = Depends(
            AccessGuard("view_users", "users", permissions=["read:users"])
        ),
        db: Session = Depends(get_db),
    ):
        return call.run(lambda: UserService(db).list_users())
=============================================================================
"""
import logging
from typing import Any, Callable, Optional, Sequence

from fastapi import Depends
from fastapi.responses import JSONResponse

from accessguard.api.deps import bearer_token, get_audit_interceptor, get_authenticator
from accessguard.core.errors import GENERIC_ERROR_MESSAGE
from accessguard.core.exceptions import AuthError, Forbidden, ServiceError, StoreError
from accessguard.models import User
from accessguard.services.audit_logger import AuditInterceptor, AuditStatus, Outcome
from accessguard.services.authentication import Authenticator
from accessguard.services.authorization import authorize_by_permission, authorize_by_role

logger = logging.getLogger(__name__)


class GuardedCall:
    """An authenticated, authorized principal plus the audit wrapper for its operation."""

    def __init__(
        self,
        principal: User,
        auditor: AuditInterceptor,
        action: str,
        resource: str,
    ):
        self.principal = principal
        self.auditor = auditor
        self.action = action
        self.resource = resource

    def run(self, operation: Callable[[], Any], success_status: int = 200) -> Any:
        """
        Execute ``operation`` through the audit interceptor.

        ServiceError raised by the operation becomes a failed Outcome with the
        error's status code; anything else propagates (and is recorded as failed).
        """

        def _operation() -> Outcome:
            try:
                return Outcome.success(operation(), status_code=success_status)
            except StoreError:
                return Outcome.failure(StoreError.status_code, GENERIC_ERROR_MESSAGE)
            except ServiceError as exc:
                return Outcome.failure(exc.status_code, exc.message)

        outcome = self.auditor.wrap(self.action, self.resource, self.principal, _operation)
        if outcome.ok:
            return outcome.value
        return JSONResponse(status_code=outcome.status_code, content={"detail": outcome.message})


class AccessGuard:
    """
    Dependency factory protecting one route.

    ``permissions`` selects the conjunctive permission policy, ``roles`` the
    disjunctive role policy. Passing neither only requires authentication.
    """

    def __init__(
        self,
        action: str,
        resource: str,
        *,
        permissions: Optional[Sequence[str]] = None,
        roles: Optional[Sequence[str]] = None,
    ):
        if permissions is not None and roles is not None:
            raise ValueError("A route uses either a permission policy or a role policy, not both")
        self.action = action
        self.resource = resource
        self.permissions = list(permissions) if permissions is not None else None
        self.roles = list(roles) if roles is not None else None

    def __call__(
        self,
        token: Optional[str] = Depends(bearer_token),
        authenticator: Authenticator = Depends(get_authenticator),
        auditor: AuditInterceptor = Depends(get_audit_interceptor),
    ) -> GuardedCall:
        try:
            principal = authenticator.authenticate(token)
        except AuthError as exc:
            logger.warning(
                "Auth failed | action=%s | reason=%s", self.action, exc.reason
            )
            auditor.record(
                None, self.action, self.resource, AuditStatus.DENIED, {"reason": exc.reason}
            )
            raise
        except ServiceError as exc:
            logger.error(
                "Principal lookup failed | action=%s | error=%s", self.action, type(exc).__name__
            )
            auditor.record(
                None,
                self.action,
                self.resource,
                AuditStatus.FAILED,
                {"reason": type(exc).__name__},
            )
            raise

        try:
            if self.permissions is not None:
                authorize_by_permission(principal, self.permissions)
            elif self.roles is not None:
                authorize_by_role(principal, self.roles)
        except Forbidden as exc:
            auditor.record(
                principal.id,
                self.action,
                self.resource,
                AuditStatus.DENIED,
                {"reason": exc.reason, **exc.details},
            )
            raise

        return GuardedCall(principal, auditor, self.action, self.resource)
