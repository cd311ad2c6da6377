"""
Users Router
Account overview for administrators.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserSummary

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[UserSummary])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List all users, newest first (Admin only)."""
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.email))
    return [UserSummary.from_user(user) for user in result.scalars().all()]
