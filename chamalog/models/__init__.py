"""SQLAlchemy ORM models."""

from chamalog.models.activity import Activity
from chamalog.models.base import Base
from chamalog.models.order import Order, OrderStatus
from chamalog.models.store import Store
from chamalog.models.user import User

__all__ = ["Activity", "Base", "Order", "OrderStatus", "Store", "User"]
