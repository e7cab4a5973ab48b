"""Schemas for the recent-activity feed."""

from datetime import datetime

from pydantic import BaseModel


class ActivityFeedItem(BaseModel):
    """One feed entry; time is relative to the moment the feed was read."""

    id: int
    action: str
    time: str
    user_id: int
    created_at: datetime
