"""Admin user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from chamalog.api.routes.auth import require_admin
from chamalog.core.database import get_db
from chamalog.schemas.auth import CurrentUser, UserPublic
from chamalog.schemas.common import CreatedResponse, MessageResponse
from chamalog.schemas.users import UserCreate, UserUpdate
from chamalog.services import directory

router = APIRouter()


@router.get("", response_model=list[UserPublic])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserPublic]:
    return [UserPublic.model_validate(u) for u in directory.list_users(db)]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> CreatedResponse:
    """Create a user of any role. 400 if the email is already in use."""
    user = directory.create_user(db, body, actor_id=admin.id)
    return CreatedResponse(id=user.id)


@router.put("/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    directory.update_user(db, user_id, body, actor_id=admin.id)
    return MessageResponse(message="User updated")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user. 400 for your own account, 409 while orders reference the user."""
    directory.delete_user(db, user_id, actor_id=admin.id)
    return MessageResponse(message="User deleted")
