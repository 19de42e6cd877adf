"""
Health check endpoint for AccessGuard API.
"""
import time
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accessguard.api import deps
from accessguard.core.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    environment: str
    timestamp: datetime
    database_latency_ms: Optional[float] = None


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(deps.get_db)):
    """Liveness plus database connectivity."""
    start = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
        latency = round((time.perf_counter() - start) * 1000, 2)
        state = "healthy"
    except SQLAlchemyError:
        latency = None
        state = "unhealthy"

    payload = HealthResponse(
        status=state,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc),
        database_latency_ms=latency,
    )
    return JSONResponse(
        status_code=200 if state == "healthy" else 503,
        content=payload.model_dump(mode="json"),
    )
