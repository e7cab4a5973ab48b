"""Small response bodies shared by several routers."""

from pydantic import BaseModel


class CreatedResponse(BaseModel):
    """Id of a newly created entity (201 responses)."""

    id: int


class MessageResponse(BaseModel):
    message: str
