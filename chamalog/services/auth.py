"""Credential checks: login, self-registration and token revocation."""

import logging

from sqlalchemy.orm import Session

from chamalog.core.config import Settings
from chamalog.core.errors import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from chamalog.core.permissions import Role
from chamalog.core.security import create_access_token, hash_password, verify_password
from chamalog.models import User
from chamalog.services.activity_log import record_activity

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def authenticate(
    session: Session,
    email: str,
    password: str,
    settings: Settings,
) -> tuple[User, str]:
    """
    Verify email and password; return the user and a signed access token.

    Raises InvalidCredentialsError for an unknown email and for a wrong
    password alike, so callers cannot tell which accounts exist.
    """
    user = session.query(User).filter(User.email == normalize_email(email)).first()
    stored_hash = user.password_hash if user is not None else None
    if not verify_password(password, stored_hash) or user is None:
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()
    token = create_access_token(
        sub=user.id,
        email=user.email,
        role=user.role,
        version=user.token_version,
        settings=settings,
    )
    logger.info("User %s logged in", user.id)
    return user, token


def register_customer(session: Session, name: str, email: str, password: str) -> User:
    """Create a customer account from the public sign-up form."""
    email = normalize_email(email)
    if session.query(User.id).filter(User.email == email).first() is not None:
        raise DuplicateEmailError()
    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=Role.CUSTOMER.value,
    )
    session.add(user)
    session.flush()
    record_activity(session, f"New customer registered: {email}", user.id)
    session.commit()
    return user


def revoke_tokens(session: Session, user_id: int) -> int:
    """Invalidate every token issued to the user so far; returns the new version."""
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    user.token_version = (user.token_version or 0) + 1
    record_activity(session, f"All sessions revoked for {user.email}", user.id)
    session.commit()
    return user.token_version
