"""ORM model for the append-only activity log."""

from sqlalchemy import Column, DateTime, Integer, Text, func

from chamalog.models.base import Base, utcnow


class Activity(Base):
    """
    One logged action. user_id is the acting user's id; it is not a foreign
    key, so entries outlive deleted accounts unchanged.
    """

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
