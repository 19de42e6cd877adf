from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from accessguard.core.config import settings

# Create engine with connection pooling (pool options are skipped for SQLite)
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    **settings.engine_options(),
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints.

    Usage:
        @app.get("/users")
        def list_users(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """
    Dependency returning the session factory itself.

    Work that outlives the request (audit writes scheduled as background
    tasks) opens its own session from this factory instead of borrowing the
    request's session, which is closed once the response is built.
    """
    return SessionLocal
