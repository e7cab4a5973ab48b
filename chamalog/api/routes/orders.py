"""Orders: CRUD, status updates, stats and the scan-to-confirm flow."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from chamalog.api.routes.auth import get_current_user, require_staff
from chamalog.core.database import get_db
from chamalog.schemas.auth import CurrentUser
from chamalog.schemas.common import CreatedResponse, MessageResponse
from chamalog.schemas.orders import (
    OrderCreate,
    OrderOut,
    OrderStats,
    ScannedCode,
    StatusUpdate,
)
from chamalog.services import orders

router = APIRouter()
tracking_router = APIRouter()


@router.get("", response_model=list[OrderOut])
def list_orders(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[OrderOut]:
    """Customers see their own orders; staff and admins see all of them."""
    rows = orders.list_orders(db, current_user, limit=limit, offset=offset)
    return [OrderOut.model_validate(o) for o in rows]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    current_user: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> CreatedResponse:
    order = orders.create_order(db, body, owner_id=current_user.id)
    return CreatedResponse(id=order.id)


@router.get("/motoboy", response_model=list[OrderOut])
def list_courier_orders(
    current_user: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> list[OrderOut]:
    """Undelivered orders assigned to the calling courier."""
    return [OrderOut.model_validate(o) for o in orders.list_courier_orders(db, current_user.id)]


@router.post("/confirmar-transporte", response_model=OrderOut)
def confirm_transport(
    body: ScannedCode,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderOut:
    """Resolve a scanned label and mark its order in transit."""
    return OrderOut.model_validate(orders.confirm_transport(db, body.qr_data, current_user.id))


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderOut:
    return OrderOut.model_validate(orders.get_visible_order(db, order_id, current_user))


@router.put("/{order_id}/status", response_model=MessageResponse)
def update_order_status(
    order_id: int,
    body: StatusUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Set status to pending, in_transit or delivered. 400 for anything else."""
    orders.update_status(db, order_id, body.status, actor_id=current_user.id)
    return MessageResponse(message="Order status updated")


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    # TODO: confirm with the operations team whether deletion should require staff.
    orders.delete_order(db, order_id, actor_id=current_user.id)
    return MessageResponse(message="Order deleted")


@tracking_router.get("/pedido-estatisticas", response_model=OrderStats)
def order_stats(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderStats:
    """Counts over every order: total, in transit (emTransito) and delivered (entregues)."""
    return orders.order_stats(db)


@tracking_router.post("/validar-qr", response_model=OrderOut)
def validate_qr(
    body: ScannedCode,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderOut:
    """Resolve a scanned QR payload to its order. 404 for unknown codes."""
    return OrderOut.model_validate(orders.resolve_scanned_code(db, body.qr_data))
