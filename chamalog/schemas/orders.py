"""Request/response schemas for orders, status updates, stats and QR validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chamalog.models.order import OrderStatus


class OrderCreate(BaseModel):
    """
    New order. code is optional: when omitted the server generates one.
    sender is not accepted from the client; it is the origin store's name.
    """

    code: str | None = Field(default=None, min_length=1, max_length=64)
    recipient: str = Field(..., min_length=1, max_length=255)
    full_address: str = Field(..., min_length=1, max_length=1024)
    weight: str = Field(..., min_length=1, max_length=64)
    dimensions: str = Field(..., min_length=1, max_length=64)
    declared_value: float = Field(..., gt=0)
    store_id: int = Field(..., description="Origin store id")
    courier_id: int | None = None


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    sender: str
    recipient: str
    full_address: str
    weight: str
    dimensions: str
    declared_value: float
    status: OrderStatus
    store_id: int
    owner_id: int
    courier_id: int | None = None
    created_at: datetime


class StatusUpdate(BaseModel):
    # Plain str so unknown values reach the service and fail as InvalidStatusError (400).
    status: str


class OrderStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    in_transit: int = Field(serialization_alias="emTransito")
    delivered: int = Field(serialization_alias="entregues")


class ScannedCode(BaseModel):
    """Payload read from a label's QR code (tracking URL or bare order code)."""

    qr_data: str = Field(..., min_length=1, max_length=2048, alias="qrData")

    model_config = ConfigDict(populate_by_name=True)
