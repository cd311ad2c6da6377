"""
Credential Store
Lookup, creation, password verification and profile updates for users.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import ValidationError
from app.models.user import Role, User, new_security_stamp
from app.services import auth_service
from app.utils.password_policy import PasswordPolicy, validate_password

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email is already registered"


def normalize_email(email: str) -> str:
    return email.strip().upper()


class CredentialStore:
    """User identity records backed by the users and roles tables."""

    def __init__(self, db: AsyncSession, policy: Optional[PasswordPolicy] = None):
        self.db = db
        self.policy = policy or PasswordPolicy.from_settings(settings)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.normalized_email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        full_name: str,
        password: str,
        *,
        email_confirmed: bool = False,
        roles: Optional[List[str]] = None,
    ) -> User:
        """
        Create a user after applying the password policy and the unique
        email rule. New accounts join the User role unless told otherwise.
        """
        errors = {}
        password_errors = validate_password(password, self.policy)
        if password_errors:
            errors["password"] = password_errors
        if await self.find_by_email(email):
            errors["email"] = [DUPLICATE_EMAIL]
        if errors:
            raise ValidationError("Registration failed", errors=errors)

        email = email.strip()
        user = User(
            username=email,
            email=email,
            normalized_email=normalize_email(email),
            full_name=full_name.strip(),
            hashed_password=auth_service.get_password_hash(password),
            email_confirmed=email_confirmed,
        )
        for role_name in roles if roles is not None else [Role.USER]:
            user.roles.append(await self._get_or_create_role(role_name))

        self.db.add(user)
        await self._commit_unique_email()
        logger.info(f"Created user {user.id} ({user.email})")
        return user

    def verify_password(self, user: User, password: str) -> bool:
        return auth_service.verify_password(password, user.hashed_password)

    async def update_password(self, user: User, current_password: str, new_password: str) -> None:
        if not self.verify_password(user, current_password):
            raise ValidationError(
                "Password change failed",
                errors={"current_password": ["Incorrect password"]},
            )
        password_errors = validate_password(new_password, self.policy)
        if password_errors:
            raise ValidationError("Password change failed", errors={"new_password": password_errors})

        user.hashed_password = auth_service.get_password_hash(new_password)
        user.security_stamp = new_security_stamp()
        await self.db.commit()
        logger.info(f"Password changed for user {user.id}")

    async def update_profile(
        self,
        user: User,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
        profile_picture: Optional[str] = None,
    ) -> bool:
        """
        Apply the provided profile fields. Returns True when the email
        changed, in which case the account is unconfirmed again.
        """
        if full_name:
            user.full_name = full_name.strip()
        if profile_picture:
            user.profile_picture = profile_picture

        email_changed = bool(email) and normalize_email(email) != user.normalized_email
        if email_changed:
            existing = await self.find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ValidationError("Profile update failed", errors={"email": [DUPLICATE_EMAIL]})
            email = email.strip()
            user.email = email
            user.username = email
            user.normalized_email = normalize_email(email)
            user.email_confirmed = False
            user.security_stamp = new_security_stamp()

        await self._commit_unique_email()
        return email_changed

    async def confirm_email(self, user: User) -> None:
        user.email_confirmed = True
        user.security_stamp = new_security_stamp()
        await self.db.commit()

    async def get_roles(self, user: User) -> List[str]:
        return user.role_names

    async def add_to_role(self, user: User, role_name: str) -> None:
        if role_name in user.role_names:
            return
        user.roles.append(await self._get_or_create_role(role_name))
        await self.db.commit()

    async def ensure_roles(self) -> None:
        for role_name in (Role.ADMIN, Role.USER):
            await self._get_or_create_role(role_name)
        await self.db.commit()

    async def _get_or_create_role(self, name: str) -> Role:
        result = await self.db.execute(select(Role).where(Role.name == name))
        role = result.scalar_one_or_none()
        if role is None:
            role = Role(name=name)
            self.db.add(role)
            await self.db.flush()
            logger.info(f"Created role {name}")
        return role

    async def _commit_unique_email(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationError("Email conflict", errors={"email": [DUPLICATE_EMAIL]}) from e
