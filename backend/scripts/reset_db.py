"""
Drop and recreate every catalog table, then seed roles and the
configured administrator. Development databases only.
"""

import asyncio

import app.models  # noqa: F401
from app.data.seed import seed_all
from app.database import Base, close_db, engine
from app.logging_config import setup_logging


async def reset_db():
    print(f"Resetting database at {engine.url.render_as_string(hide_password=True)}...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await seed_all()
    await close_db()
    print("Database reset complete.")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(reset_db())
