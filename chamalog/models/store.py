"""ORM model for stores, the origin of every order."""

from sqlalchemy import Column, DateTime, Integer, String, func

from chamalog.models.base import Base, utcnow


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(String(1024), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
