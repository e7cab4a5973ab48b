"""Schemas for shipping label generation."""

from pydantic import BaseModel, ConfigDict, Field


class LabelRequest(BaseModel):
    """Accepts the dashboard's `pedido_id` as well as `order_id`."""

    order_id: int = Field(..., alias="pedido_id", description="Id of the order to print a label for")

    model_config = ConfigDict(populate_by_name=True)


class LabelResponse(BaseModel):
    pdf: str = Field(..., description="Base64-encoded PDF label")
