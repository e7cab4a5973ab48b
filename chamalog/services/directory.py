"""User and store directory: admin-managed reference data for orders."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chamalog.core.errors import (
    ConflictError,
    DuplicateEmailError,
    NotFoundError,
    SelfDeletionError,
)
from chamalog.core.security import hash_password
from chamalog.models import Order, Store, User
from chamalog.schemas.stores import StoreIn
from chamalog.schemas.users import UserCreate, UserUpdate
from chamalog.services.activity_log import record_activity
from chamalog.services.auth import normalize_email

logger = logging.getLogger(__name__)


def _get_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def _get_store(session: Session, store_id: int) -> Store:
    store = session.get(Store, store_id)
    if store is None:
        raise NotFoundError("Store not found.")
    return store


def _check_store_exists(session: Session, store_id: int | None) -> None:
    if store_id is not None:
        _get_store(session, store_id)


def _email_taken(session: Session, email: str, exclude_id: int | None = None) -> bool:
    query = session.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def list_users(session: Session) -> list[User]:
    return session.query(User).order_by(User.id).all()


def create_user(session: Session, data: UserCreate, actor_id: int) -> User:
    """Create a user with a bcrypt-hashed password. Duplicate emails are rejected."""
    email = normalize_email(data.email)
    if _email_taken(session, email):
        raise DuplicateEmailError()
    _check_store_exists(session, data.store_id)
    user = User(
        name=data.name.strip(),
        email=email,
        password_hash=hash_password(data.password),
        role=data.role.value,
        store_id=data.store_id,
    )
    session.add(user)
    record_activity(session, f"New user created: {email} ({data.role.value})", actor_id)
    try:
        session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent insert of the same email.
        session.rollback()
        raise DuplicateEmailError() from e
    logger.info("User %s created by %s", user.id, actor_id)
    return user


def update_user(session: Session, user_id: int, data: UserUpdate, actor_id: int) -> User:
    """Update name, email, role and store. The password is never touched here."""
    user = _get_user(session, user_id)
    email = normalize_email(data.email)
    if _email_taken(session, email, exclude_id=user_id):
        raise DuplicateEmailError()
    _check_store_exists(session, data.store_id)
    user.name = data.name.strip()
    user.email = email
    user.role = data.role.value
    user.store_id = data.store_id
    record_activity(session, f"User updated: {email} ({data.role.value})", actor_id)
    session.commit()
    return user


def delete_user(session: Session, user_id: int, actor_id: int) -> None:
    """
    Delete a user. Callers cannot delete themselves, and users still referenced
    by orders (as owner or courier) are kept.
    """
    user = _get_user(session, user_id)
    if user.id == actor_id:
        raise SelfDeletionError()
    referenced = (
        session.query(Order.id)
        .filter(or_(Order.owner_id == user_id, Order.courier_id == user_id))
        .first()
    )
    if referenced is not None:
        raise ConflictError("User has associated records and cannot be deleted.")
    email = user.email
    session.delete(user)
    record_activity(session, f"User deleted: {email}", actor_id)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError("User has associated records and cannot be deleted.") from e
    logger.info("User %s deleted by %s", user_id, actor_id)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


def list_stores(session: Session) -> list[Store]:
    return session.query(Store).order_by(Store.id).all()


def create_store(session: Session, data: StoreIn, actor_id: int) -> Store:
    store = Store(name=data.name, address=data.address)
    session.add(store)
    record_activity(session, f"New store created: {data.name}", actor_id)
    session.commit()
    return store


def update_store(session: Session, store_id: int, data: StoreIn, actor_id: int) -> Store:
    """Rename or move a store. Existing orders keep the sender name they were created with."""
    store = _get_store(session, store_id)
    store.name = data.name
    store.address = data.address
    record_activity(session, f"Store updated: {data.name}", actor_id)
    session.commit()
    return store


def delete_store(session: Session, store_id: int, actor_id: int) -> None:
    """Delete a store unless an order still points at it. Users assigned to it are unassigned."""
    store = _get_store(session, store_id)
    if session.query(Order.id).filter(Order.store_id == store_id).first() is not None:
        raise ConflictError("Store is referenced by existing orders and cannot be deleted.")
    name = store.name
    session.delete(store)
    record_activity(session, f"Store deleted: {name}", actor_id)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError("Store is referenced by existing orders and cannot be deleted.") from e
    logger.info("Store %s deleted by %s", store_id, actor_id)
