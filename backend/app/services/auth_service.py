"""
Authentication Service
Handles password hashing, JWT creation, and validation.
"""

import uuid
from datetime import datetime, timedelta
from typing import Iterable, Optional

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from app.config import settings
from app.exceptions import TokenError

# Password hashing configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REQUIRED_CLAIMS = ["sub", "email", "jti", "iss", "aud", "exp"]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check if plain password matches hashed version."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate bcrypt hash of password."""
    return pwd_context.hash(password)


def create_access_token(user, roles: Iterable[str], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for an authenticated user.
    One `role` entry is emitted per role membership.
    """
    now = datetime.utcnow()
    if expires_delta is None:
        expires_delta = timedelta(days=settings.access_token_expire_days)

    claims = {
        "sub": str(user.id),
        "name": user.username,
        "email": user.email,
        "jti": str(uuid.uuid4()),
        "role": list(roles),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """
    Validate a session token and return its claims.
    Signature, issuer, audience and expiry must all check out.
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require": REQUIRED_CLAIMS},
        )
    except PyJWTError as e:
        raise TokenError() from e
