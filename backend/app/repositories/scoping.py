"""
Ownership Scoping
The predicate every catalog query goes through, plus the optimistic
concurrency commit shared by both repositories.
"""

import logging

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.exceptions import ConcurrencyConflictError, NotFoundError

logger = logging.getLogger(__name__)


def owned_by(model, owner_id: str):
    """Rows visible to `owner_id`: their own, not soft-deleted."""
    if not owner_id:
        raise ValueError("owner_id is required for catalog queries")
    return and_(model.owner_id == owner_id, model.is_deleted.is_(False))


async def exists_for_owner(db: AsyncSession, model, owner_id: str, row_id: int) -> bool:
    result = await db.execute(
        select(func.count(model.id)).where(model.id == row_id, owned_by(model, owner_id))
    )
    return (result.scalar() or 0) > 0


async def commit_versioned(db: AsyncSession, model, owner_id: str, row_id: int, not_found: str) -> None:
    """
    Commit an update guarded by the row's version column.

    When another request changed the row first, the transaction is rolled
    back and the row re-checked once: gone means not found, otherwise the
    conflict is raised to the caller.
    """
    try:
        await db.commit()
    except StaleDataError as e:
        await db.rollback()
        if not await exists_for_owner(db, model, owner_id, row_id):
            raise NotFoundError(not_found) from e
        logger.warning(f"Concurrent update conflict on {model.__tablename__} id={row_id}")
        raise ConcurrencyConflictError() from e
