"""Readiness endpoint: database reachable and the tracking schema migrated."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chamalog import __version__
from chamalog.core.config import Settings, get_settings
from chamalog.core.database import check_db_connected, get_db, missing_tables
from chamalog.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """'ok' only when the database answers and stores, users, orders and activities exist."""
    if not check_db_connected(db):
        return HealthResponse(
            status="degraded",
            version=__version__,
            environment=settings.APP_ENV,
            database="disconnected",
        )
    missing = missing_tables(db)
    return HealthResponse(
        status="degraded" if missing else "ok",
        version=__version__,
        environment=settings.APP_ENV,
        database="connected",
        missing_tables=missing,
    )
