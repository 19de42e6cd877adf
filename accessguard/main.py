import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accessguard.api.routes import audit, auth, health, permissions, resources, roles, users
from accessguard.core.config import settings
from accessguard.core.errors import register_exception_handlers
from accessguard.core.logging import setup_logging
from accessguard.core.middleware import RequestIdMiddleware
from accessguard.db.base import Base
from accessguard.db.session import engine
from accessguard.services.token_codec import TokenCodec

# Setup logging
logger = setup_logging()


# =============================================================================
# OpenAPI Tags Metadata
# =============================================================================
tags_metadata = [
    {
        "name": "auth",
        "description": "**Authentication** - Registration, password login and bearer token profile.",
    },
    {
        "name": "users",
        "description": "**Users** - Account administration. Requires `*:users` permissions.",
    },
    {
        "name": "roles",
        "description": "**Roles** - Named permission bundles with a display level.",
    },
    {
        "name": "permissions",
        "description": "**Permissions** - `action:resource` grants attached to roles.",
    },
    {
        "name": "resources",
        "description": "**Resources** - Protected resource descriptors. Role-guarded (Admin, Manager).",
    },
    {
        "name": "audit",
        "description": "**Audit Trail** - Read-only, filterable record of every protected call.",
    },
    {
        "name": "health",
        "description": "**Health** - Liveness and database connectivity.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if settings.SECRET_KEY is None:
        logging.getLogger(__name__).warning(
            "SECRET_KEY not set, signing tokens with the development key"
        )
    app.state.token_codec = TokenCodec.from_settings(settings)

    if settings.DB_CREATE_ALL:
        Base.metadata.create_all(bind=engine)

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
## AccessGuard API

Role-based access control service: bearer-token authentication, permission and
role policies on every protected route, and an audit record for each outcome.
    """,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID Tracing
app.add_middleware(RequestIdMiddleware)

# Register global exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix=f"{settings.API_V1_PREFIX}/auth", tags=["auth"])

app.include_router(users.router, prefix=f"{settings.API_V1_PREFIX}/users", tags=["users"])

app.include_router(roles.router, prefix=f"{settings.API_V1_PREFIX}/roles", tags=["roles"])

app.include_router(
    permissions.router,
    prefix=f"{settings.API_V1_PREFIX}/permissions",
    tags=["permissions"],
)

app.include_router(
    resources.router,
    prefix=f"{settings.API_V1_PREFIX}/resources",
    tags=["resources"],
)

app.include_router(audit.router, prefix=f"{settings.API_V1_PREFIX}/audit", tags=["audit"])

app.include_router(health.router, prefix=settings.API_V1_PREFIX, tags=["health"])


# Root endpoint
@app.get("/", summary="API root")
async def root():
    """Root endpoint with API info"""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "health": f"{settings.API_V1_PREFIX}/health",
    }
