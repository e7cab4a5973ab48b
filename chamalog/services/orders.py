"""Order lifecycle: create, list, status updates, deletion, stats and QR resolution."""

import logging
import secrets
import time

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chamalog.core.errors import (
    ConflictError,
    InvalidStatusError,
    NotFoundError,
    ValidationFailedError,
)
from chamalog.core.permissions import Role
from chamalog.models import Order, OrderStatus, Store, User
from chamalog.schemas.auth import CurrentUser
from chamalog.schemas.orders import OrderCreate, OrderStats
from chamalog.services.activity_log import record_activity
from chamalog.services.labels import extract_code

logger = logging.getLogger(__name__)

VALID_STATUSES = frozenset(s.value for s in OrderStatus)

# Attempts at a fresh generated code before giving up.
MAX_CODE_ATTEMPTS = 5


def generate_order_code() -> str:
    """Human-readable tracking code: 'TR' followed by the epoch in milliseconds."""
    return f"TR{int(time.time() * 1000)}"


def _code_exists(session: Session, code: str) -> bool:
    return session.query(Order.id).filter(Order.code == code).first() is not None


def _unique_code(session: Session) -> str:
    code = generate_order_code()
    for _ in range(MAX_CODE_ATTEMPTS):
        if not _code_exists(session, code):
            return code
        code = f"{generate_order_code()}{secrets.randbelow(1000):03d}"
    raise ValidationFailedError("Could not generate a unique order code; try again.")


def get_order(session: Session, order_id: int) -> Order:
    order = session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found.")
    return order


def get_visible_order(session: Session, order_id: int, caller: CurrentUser) -> Order:
    """Fetch an order; customers only see their own, others look missing (404)."""
    order = get_order(session, order_id)
    if caller.role == Role.CUSTOMER and order.owner_id != caller.id:
        raise NotFoundError("Order not found.")
    return order


def create_order(session: Session, data: OrderCreate, owner_id: int) -> Order:
    """
    Persist a new pending order owned by `owner_id`.

    The sender is the origin store's name. A supplied code must be unused;
    without one a code is generated. Records an activity in the same commit.
    """
    store = session.get(Store, data.store_id)
    if store is None:
        raise NotFoundError("Store not found.")
    if data.courier_id is not None:
        courier = session.get(User, data.courier_id)
        if courier is None or courier.role == Role.CUSTOMER.value:
            raise ValidationFailedError("Courier must be an existing staff or admin user.")

    if data.code is not None:
        code = data.code.strip()
        if not code:
            raise ValidationFailedError("Order code must not be blank.")
        if _code_exists(session, code):
            raise ValidationFailedError(f"Order code {code!r} is already in use.")
    else:
        code = _unique_code(session)

    order = Order(
        code=code,
        sender=store.name,
        recipient=data.recipient.strip(),
        full_address=data.full_address.strip(),
        weight=data.weight,
        dimensions=data.dimensions,
        declared_value=data.declared_value,
        status=OrderStatus.PENDING.value,
        store_id=store.id,
        owner_id=owner_id,
        courier_id=data.courier_id,
    )
    session.add(order)
    record_activity(session, f"New order created (#{code})", owner_id)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if _code_exists(session, code):
            raise ValidationFailedError(f"Order code {code!r} is already in use.") from e
        if session.get(User, owner_id) is None:
            raise ConflictError("Order owner no longer exists.") from e
        raise ConflictError("Order references a store or user that no longer exists.") from e
    logger.info("Order %s (%s) created by %s", order.id, code, owner_id)
    return order


def list_orders(
    session: Session,
    caller: CurrentUser,
    limit: int | None = None,
    offset: int = 0,
) -> list[Order]:
    """Customers get the orders they own; staff and admins get every order. Ordered by id."""
    query = session.query(Order)
    if caller.role == Role.CUSTOMER:
        query = query.filter(Order.owner_id == caller.id)
    query = query.order_by(Order.id).offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def list_courier_orders(session: Session, courier_id: int) -> list[Order]:
    """Orders assigned to a courier that are not delivered yet."""
    return (
        session.query(Order)
        .filter(
            Order.courier_id == courier_id,
            Order.status != OrderStatus.DELIVERED.value,
        )
        .order_by(Order.id)
        .all()
    )


def update_status(session: Session, order_id: int, status: str, actor_id: int) -> Order:
    """
    Set an order's status to one of pending, in_transit, delivered.

    Any transition between the three values is accepted. Unknown values raise
    InvalidStatusError before anything is written.
    """
    if status not in VALID_STATUSES:
        raise InvalidStatusError(status)
    order = get_order(session, order_id)
    order.status = status
    record_activity(session, f"Order #{order.code} status updated to '{status}'", actor_id)
    session.commit()
    logger.info("Order %s status set to %s by %s", order_id, status, actor_id)
    return order


def delete_order(session: Session, order_id: int, actor_id: int) -> None:
    order = get_order(session, order_id)
    code = order.code
    session.delete(order)
    record_activity(session, f"Order deleted (#{code})", actor_id)
    session.commit()
    logger.info("Order %s (%s) deleted by %s", order_id, code, actor_id)


def order_stats(session: Session) -> OrderStats:
    """Live counts over the whole orders table."""
    total = session.query(Order).count()
    in_transit = (
        session.query(Order).filter(Order.status == OrderStatus.IN_TRANSIT.value).count()
    )
    delivered = (
        session.query(Order).filter(Order.status == OrderStatus.DELIVERED.value).count()
    )
    return OrderStats(total=total, in_transit=in_transit, delivered=delivered)


def resolve_scanned_code(session: Session, payload: str) -> Order:
    """Find the order whose code is carried by a scanned label payload."""
    code = extract_code(payload)
    order = session.query(Order).filter(Order.code == code).first() if code else None
    if order is None:
        raise NotFoundError("Invalid QR code: no matching order.")
    return order


def confirm_transport(session: Session, payload: str, actor_id: int) -> Order:
    """Courier pickup: resolve the scanned label and mark the order in transit."""
    order = resolve_scanned_code(session, payload)
    return update_status(session, order.id, OrderStatus.IN_TRANSIT.value, actor_id)
