"""Request schemas for admin user management."""

from pydantic import BaseModel, EmailStr, Field

from chamalog.core.permissions import Role
from chamalog.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = Role.CUSTOMER
    store_id: int | None = None


class UserUpdate(BaseModel):
    """Profile fields an admin may change. Passwords are not changed here."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: Role
    store_id: int | None = None
