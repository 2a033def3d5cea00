"""Liveness plus a database round trip through the pool."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roster.core.config import settings
from roster.core.database import check_db_connected, get_db
from roster.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Always 200 while the process is up; `database` tells whether Postgres answered."""
    return HealthResponse(
        environment=settings.APP_ENV,
        registration_policy=settings.REGISTRATION_POLICY,
        database="connected" if check_db_connected(db) else "disconnected",
    )
