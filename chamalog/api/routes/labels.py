"""Label endpoint: render an order's shipping label as a base64 PDF."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chamalog.api.routes.auth import get_current_user
from chamalog.core.config import Settings, get_settings
from chamalog.core.database import get_db
from chamalog.schemas.auth import CurrentUser
from chamalog.schemas.labels import LabelRequest, LabelResponse
from chamalog.services.labels import generate_order_label

router = APIRouter()


@router.post("", response_model=LabelResponse)
def create_label(
    body: LabelRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LabelResponse:
    """
    Render the 100 x 150 mm label for an order. The QR code on it encodes the
    order's tracking URL, which POST /validar-qr resolves back to the order.
    """
    pdf = generate_order_label(
        db,
        body.order_id,
        actor_id=current_user.id,
        tracking_base_url=settings.LABEL_TRACKING_BASE_URL,
    )
    return LabelResponse(pdf=pdf)
