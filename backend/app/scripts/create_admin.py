"""
Create Admin User Script
Creates the roles and an admin user if it does not already exist.
Usage: ADMIN_EMAIL=... ADMIN_PASSWORD=... python -m app.scripts.create_admin
"""

import asyncio
import os
import sys

# Add parent directory to path to allow running as module
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from app.config import settings
from app.data.seed import seed_admin
from app.database import AsyncSessionLocal, init_db
from app.exceptions import ValidationError


async def create_admin():
    if not settings.admin_email or not settings.admin_password:
        print("ADMIN_EMAIL and ADMIN_PASSWORD are required to create the admin user.")
        return

    await init_db()
    async with AsyncSessionLocal() as db:
        try:
            admin = await seed_admin(db, settings.admin_email, settings.admin_password, settings.admin_full_name)
        except ValidationError as e:
            print("Could not create the admin user:")
            for field, messages in (e.errors or {}).items():
                for message in messages:
                    print(f"- {field}: {message}")
            return

    print(f"Admin user ready: {admin.email}")


if __name__ == "__main__":
    asyncio.run(create_admin())
