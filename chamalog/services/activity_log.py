"""Activity log: append-only entries and the recent-activity feed."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from chamalog.models import Activity
from chamalog.schemas.activities import ActivityFeedItem

logger = logging.getLogger(__name__)


def record_activity(session: Session, description: str, user_id: int) -> Activity:
    """
    Add an activity row to the session. The caller commits, so the entry is
    written in the same transaction as the action it describes.
    """
    entry = Activity(description=description, user_id=user_id)
    session.add(entry)
    logger.debug("Activity recorded: user_id=%s description=%s", user_id, description)
    return entry


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def relative_time(created_at: datetime, now: datetime | None = None) -> str:
    """Human-readable age of a timestamp: 'just now', 'N minutes ago', 'N hours ago', 'N days ago'."""
    now = now or datetime.now(UTC)
    # SQLite hands back naive datetimes; stored values are always UTC.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    seconds = int((now - created_at).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _plural(seconds // 60, "minute") + " ago"
    if seconds < 86400:
        return _plural(seconds // 3600, "hour") + " ago"
    return _plural(seconds // 86400, "day") + " ago"


def recent_feed(
    session: Session,
    limit: int,
    now: datetime | None = None,
) -> list[ActivityFeedItem]:
    """Most recent `limit` activities, newest first, with relative times computed now."""
    rows = (
        session.query(Activity)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit)
        .all()
    )
    now = now or datetime.now(UTC)
    return [
        ActivityFeedItem(
            id=row.id,
            action=row.description,
            time=relative_time(row.created_at, now),
            user_id=row.user_id,
            created_at=row.created_at,
        )
        for row in rows
    ]
