"""Pydantic request/response schemas."""

from chamalog.schemas.activities import ActivityFeedItem
from chamalog.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserPublic,
)
from chamalog.schemas.common import CreatedResponse, MessageResponse
from chamalog.schemas.health import HealthResponse
from chamalog.schemas.labels import LabelRequest, LabelResponse
from chamalog.schemas.orders import (
    OrderCreate,
    OrderOut,
    OrderStats,
    ScannedCode,
    StatusUpdate,
)
from chamalog.schemas.postal_code import PostalAddress
from chamalog.schemas.stores import StoreIn, StoreOut
from chamalog.schemas.users import UserCreate, UserUpdate

__all__ = [
    "ActivityFeedItem",
    "CreatedResponse",
    "CurrentUser",
    "HealthResponse",
    "LabelRequest",
    "LabelResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "OrderCreate",
    "OrderOut",
    "OrderStats",
    "PostalAddress",
    "RegisterRequest",
    "ScannedCode",
    "StatusUpdate",
    "StoreIn",
    "StoreOut",
    "UserCreate",
    "UserPublic",
    "UserUpdate",
]
