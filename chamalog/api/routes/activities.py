"""Recent activity feed for the dashboard."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from chamalog.api.routes.auth import get_current_user
from chamalog.core.config import Settings, get_settings
from chamalog.core.database import get_db
from chamalog.schemas.activities import ActivityFeedItem
from chamalog.schemas.auth import CurrentUser
from chamalog.services.activity_log import recent_feed

router = APIRouter()


@router.get("", response_model=list[ActivityFeedItem])
def recent_activities(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> list[ActivityFeedItem]:
    """Newest entries first; defaults to ACTIVITY_FEED_LIMIT entries."""
    return recent_feed(db, limit or settings.ACTIVITY_FEED_LIMIT)
