"""Login, sign-up and auth dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from chamalog.core.config import Settings, get_settings
from chamalog.core.database import get_db
from chamalog.core.permissions import Role, has_rank
from chamalog.core.security import decode_access_token
from chamalog.models import User
from chamalog.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserPublic,
)
from chamalog.schemas.common import CreatedResponse, MessageResponse
from chamalog.services.auth import authenticate, register_customer, revoke_tokens

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the caller. Raises 401 if
    missing, malformed or expired. Verification uses only the token's signature
    and claims unless JWT_CHECK_TOKEN_VERSION is on.
    """
    if credentials is None:
        raise _unauthenticated("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise _unauthenticated("Invalid or expired token")
    try:
        user = CurrentUser(
            id=int(payload["sub"]),
            email=payload.get("email", ""),
            role=payload.get("role"),
        )
    except (KeyError, TypeError, ValueError):
        raise _unauthenticated("Invalid token payload")

    if settings.JWT_CHECK_TOKEN_VERSION:
        row = db.get(User, user.id)
        if row is None or row.token_version != payload.get("ver", 0):
            raise _unauthenticated("Token has been revoked")
    return user


def require_role(minimum: Role) -> Callable[..., CurrentUser]:
    """Dependency factory: caller's role must rank at least `minimum`, else 403."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if not has_rank(current_user.role, minimum):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    dependency.__name__ = f"require_{minimum.value}"
    return dependency


require_staff = require_role(Role.STAFF)
require_admin = require_role(Role.ADMIN)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns the user and a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, token = authenticate(db, body.email, body.password, settings)
    return LoginResponse(user=UserPublic.model_validate(user), token=token)


@router.post("/registro", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> CreatedResponse:
    """Create a customer account. Staff and admin accounts are created by an admin."""
    user = register_customer(db, body.name, body.email, body.password)
    return CreatedResponse(id=user.id)


@router.get("/me", response_model=UserPublic)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    user = db.get(User, current_user.id)
    if user is None:
        raise _unauthenticated("User not found")
    return UserPublic.model_validate(user)


@router.post("/logout-all", response_model=MessageResponse)
def logout_everywhere(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """
    Invalidate every token issued to the caller. Only enforced when
    JWT_CHECK_TOKEN_VERSION is enabled; plain logout is deleting the token client-side.
    """
    revoke_tokens(db, current_user.id)
    return MessageResponse(message="All sessions revoked")
