"""
API Dependencies
Reusable FastAPI dependencies for endpoint protection and service wiring.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import AuthorizationError, TokenError
from app.models.user import Role, User
from app.repositories import CategoryRepository, ProductRepository
from app.services import auth_service
from app.services.credential_store import CredentialStore

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity resolved from a session token."""
    id: str
    username: str
    email: str
    roles: Tuple[str, ...]

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    @classmethod
    def from_claims(cls, claims: dict) -> "CurrentUser":
        roles = claims.get("role") or []
        if isinstance(roles, str):
            roles = [roles]
        return cls(
            id=claims["sub"],
            username=claims.get("name") or claims["email"],
            email=claims["email"],
            roles=tuple(roles),
        )


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """
    Extract the caller from the `Authorization: Bearer` header.
    Returns None if the token is missing or invalid.
    """
    if not credentials or not credentials.credentials:
        return None

    try:
        claims = auth_service.decode_access_token(credentials.credentials)
    except TokenError:
        return None

    return CurrentUser.from_claims(claims)


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_current_user_optional)
) -> CurrentUser:
    """
    Dependency that enforces authentication.
    Always requires a valid token - use get_current_user_optional for public endpoints.
    """
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    Dependency that enforces admin privileges.
    The token must carry the Admin role.
    """
    if not user.is_admin:
        raise AuthorizationError()
    return user


def get_credential_store(db: AsyncSession = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


async def get_current_account(
    user: CurrentUser = Depends(get_current_user),
    store: CredentialStore = Depends(get_credential_store),
) -> User:
    """Load the caller's user record; a token for a vanished user is rejected."""
    account = await store.find_by_id(user.id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account
