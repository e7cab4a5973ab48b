"""ORM model for shipment orders."""

from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    func,
)

from chamalog.models.base import Base, utcnow


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"


class Order(Base):
    """
    Shipment order tracked from creation to delivery.

    code is unique and never changes after creation; it is what the label's QR code carries.
    sender holds the origin store's name as resolved at creation time.
    """

    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_transit', 'delivered')",
            name="ck_orders_status",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), nullable=False, unique=True, index=True)
    sender = Column(String(255), nullable=False)
    recipient = Column(String(255), nullable=False)
    full_address = Column(String(1024), nullable=False)
    weight = Column(String(64), nullable=False)
    dimensions = Column(String(64), nullable=False)
    declared_value = Column(Numeric(12, 2), nullable=False)
    status = Column(
        String(32),
        nullable=False,
        default=OrderStatus.PENDING.value,
        server_default=OrderStatus.PENDING.value,
        index=True,
    )
    store_id = Column(
        Integer,
        ForeignKey("stores.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    courier_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
