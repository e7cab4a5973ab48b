"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from chamalog.core.permissions import Role
from chamalog.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Account email")
    # No minimum here: a short password is simply a wrong password.
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RegisterRequest(BaseModel):
    """Self-registration; always creates a customer account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserPublic(BaseModel):
    """User record as exposed over the API (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    store_id: int | None = None
    created_at: datetime


class LoginResponse(BaseModel):
    """Authenticated user plus the bearer token to send on later requests."""

    user: UserPublic
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")


class CurrentUser(BaseModel):
    """Authenticated caller as decoded from the token, for dependency injection."""

    id: int
    email: str
    role: Role
