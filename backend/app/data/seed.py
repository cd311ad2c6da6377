"""
Database Seeding
Creates the Admin and User roles and, when configured, the initial
administrator account.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import AsyncSessionLocal
from app.exceptions import ValidationError
from app.models.user import Role, User
from app.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


async def seed_admin(
    session: AsyncSession,
    email: Optional[str],
    password: Optional[str],
    full_name: str = "Administrator",
) -> Optional[User]:
    """Create a confirmed admin unless one with this email exists."""
    store = CredentialStore(session)
    await store.ensure_roles()

    if not email or not password:
        logger.info("No initial administrator configured")
        return None

    existing = await store.find_by_email(email)
    if existing:
        if Role.ADMIN not in existing.role_names:
            await store.add_to_role(existing, Role.ADMIN)
            logger.info(f"Granted Admin role to {existing.email}")
        return existing

    admin = await store.create(
        email,
        full_name,
        password,
        email_confirmed=True,
        roles=[Role.ADMIN],
    )
    logger.info(f"Created default admin user {admin.email}")
    return admin


async def seed_all() -> None:
    async with AsyncSessionLocal() as session:
        try:
            await seed_admin(
                session,
                settings.admin_email,
                settings.admin_password,
                settings.admin_full_name,
            )
        except ValidationError as e:
            logger.error(f"Failed to create admin user: {e.errors}")
            raise


if __name__ == "__main__":
    asyncio.run(seed_all())
