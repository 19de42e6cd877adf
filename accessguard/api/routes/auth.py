"""
Authentication API routes for AccessGuard
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from accessguard.api.deps import get_audit_interceptor, get_db, get_token_codec
from accessguard.api.guards import AccessGuard, GuardedCall
from accessguard.models import User
from accessguard.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
)
from accessguard.schemas.user import ProfileRead, UserRead
from accessguard.services.audit_logger import AuditInterceptor
from accessguard.services.auth_service import AuthService
from accessguard.services.permissions import aggregate_permissions
from accessguard.services.token_codec import TokenCodec

router = APIRouter(tags=["auth"])


def get_auth_service(
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
    auditor: AuditInterceptor = Depends(get_audit_interceptor),
) -> AuthService:
    """Dependency to get auth service."""
    return AuthService(db, codec, auditor)


def build_profile(user: User) -> ProfileRead:
    profile = ProfileRead.model_validate(user)
    return profile.model_copy(update={"permissions": sorted(aggregate_permissions(user))})


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Self-registration; the account receives the default role."""
    user = auth_service.register(data.username, data.email, data.password, data.full_name)
    return RegisterResponse(user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    description="Authenticate with username and password",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthResponse:
    user, token = auth_service.login(data.username, data.password)
    return AuthResponse(
        access_token=token,
        expires_in=int(codec.lifetime.total_seconds()),
        user=build_profile(user),
    )


@router.get("/me", response_model=ProfileRead, summary="Current user profile")
async def read_me(
    call: GuardedCall = Depends(AccessGuard("view_profile", "auth")),
) -> ProfileRead:
    return call.run(lambda: build_profile(call.principal))


@router.post("/logout", response_model=MessageResponse, summary="Log out")
async def logout(
    call: GuardedCall = Depends(AccessGuard("logout", "auth")),
) -> MessageResponse:
    """Tokens are stateless; logging out only leaves a trace in the audit log."""
    return call.run(lambda: MessageResponse(message="Logged out successfully"))
