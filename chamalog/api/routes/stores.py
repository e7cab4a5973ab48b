"""Stores: listed by staff, managed by admins."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from chamalog.api.routes.auth import require_admin, require_staff
from chamalog.core.database import get_db
from chamalog.schemas.auth import CurrentUser
from chamalog.schemas.common import CreatedResponse, MessageResponse
from chamalog.schemas.stores import StoreIn, StoreOut
from chamalog.services import directory

router = APIRouter()


@router.get("", response_model=list[StoreOut])
def list_stores(
    _user: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> list[StoreOut]:
    return [StoreOut.model_validate(s) for s in directory.list_stores(db)]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_store(
    body: StoreIn,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> CreatedResponse:
    store = directory.create_store(db, body, actor_id=admin.id)
    return CreatedResponse(id=store.id)


@router.put("/{store_id}", response_model=StoreOut)
def update_store(
    store_id: int,
    body: StoreIn,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> StoreOut:
    return StoreOut.model_validate(directory.update_store(db, store_id, body, actor_id=admin.id))


@router.delete("/{store_id}", response_model=MessageResponse)
def delete_store(
    store_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a store. 409 while any order was shipped from it."""
    directory.delete_store(db, store_id, actor_id=admin.id)
    return MessageResponse(message="Store deleted")
