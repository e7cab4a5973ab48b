"""Request/response schemas for stores."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreIn(BaseModel):
    """Body for creating or updating a store; both fields are required."""

    name: str = Field(..., max_length=255)
    address: str = Field(..., max_length=1024)

    @field_validator("name", "address")
    @classmethod
    def strip_and_require(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class StoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
