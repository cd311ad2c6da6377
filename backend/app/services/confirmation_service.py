"""
Email Confirmation Service
Issues and redeems single-use email confirmation tokens.

A token is a short-lived JWT bound to the user's id and current security
stamp. Confirming rotates the stamp, which consumes every outstanding token.
"""

import base64
import binascii
import logging
from datetime import datetime, timedelta

import jwt
from jwt import PyJWTError

from app.config import settings
from app.exceptions import InvalidTokenError, InvalidUserError
from app.models.user import User
from app.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

PURPOSE = "email_confirmation"


def issue_confirmation_token(user: User) -> str:
    """Return a URL-safe confirmation token for the user's current state."""
    now = datetime.utcnow()
    claims = {
        "sub": str(user.id),
        "stamp": user.security_stamp,
        "purpose": PURPOSE,
        "iat": now,
        "exp": now + timedelta(hours=settings.confirmation_token_expire_hours),
    }
    raw = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def _decode_transport(token: str) -> str:
    padded = token + "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")


def _token_matches(user: User, token: str) -> bool:
    try:
        raw = _decode_transport(token)
        claims = jwt.decode(
            raw,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "stamp", "purpose", "exp"]},
        )
    except (ValueError, binascii.Error, UnicodeError, PyJWTError):
        return False

    return (
        claims.get("purpose") == PURPOSE
        and claims.get("sub") == str(user.id)
        and claims.get("stamp") == user.security_stamp
    )


async def confirm(store: CredentialStore, user_id: str, token: str) -> User:
    """
    Mark the user's email as confirmed.

    Raises InvalidUserError for an unknown user and InvalidTokenError for
    any token that is malformed, expired, for someone else or already used.
    """
    user = await store.find_by_id(user_id)
    if user is None:
        raise InvalidUserError()

    if user.email_confirmed or not _token_matches(user, token):
        logger.warning(f"Rejected email confirmation token for user {user_id}")
        raise InvalidTokenError()

    await store.confirm_email(user)
    logger.info(f"Email confirmed for user {user.id}")
    return user
