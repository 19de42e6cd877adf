from typing import Generator

from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, sessionmaker

from accessguard.db.session import SessionLocal, get_session_factory
from accessguard.services.audit_logger import AuditContext, AuditInterceptor
from accessguard.services.authentication import Authenticator
from accessguard.services.credential_store import CredentialStore
from accessguard.services.token_codec import TokenCodec

# Security scheme for JWT; missing headers are handled by the authenticator
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token_codec(request: Request) -> TokenCodec:
    """Codec built once in the application lifespan."""
    return request.app.state.token_codec


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_authenticator(
    codec: TokenCodec = Depends(get_token_codec),
    store: CredentialStore = Depends(get_credential_store),
) -> Authenticator:
    return Authenticator(codec, store)


def audit_context(request: Request) -> AuditContext:
    return AuditContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        details={
            "method": request.method,
            "path": request.url.path,
            "query": dict(request.query_params),
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def get_audit_interceptor(
    request: Request,
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> AuditInterceptor:
    """
    Per-request interceptor whose writes run as background tasks.

    The task list is also kept on request.state so that exception handlers
    can attach it to error responses; otherwise records of denied or failed
    calls would be dropped together with the route's response.
    """
    request.state.audit_tasks = background_tasks
    return AuditInterceptor(
        session_factory,
        scheduler=background_tasks.add_task,
        context=audit_context(request),
    )


def bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    if not credentials or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials
