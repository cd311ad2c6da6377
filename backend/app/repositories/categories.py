"""
Product Category Repository
Owner-scoped access to product categories.
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, ValidationError
from app.models.catalog import ProductCategory
from app.repositories.scoping import commit_versioned, owned_by
from app.schemas.catalog import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

NOT_FOUND = "Product category not found"


class CategoryRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, owner_id: str) -> List[ProductCategory]:
        result = await self.db.execute(
            select(ProductCategory)
            .where(owned_by(ProductCategory, owner_id))
            .order_by(ProductCategory.id)
        )
        return list(result.scalars().all())

    async def get(self, owner_id: str, category_id: int) -> ProductCategory:
        result = await self.db.execute(
            select(ProductCategory).where(
                ProductCategory.id == category_id,
                owned_by(ProductCategory, owner_id),
            )
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError(NOT_FOUND)
        return category

    async def create(self, owner_id: str, data: CategoryCreate) -> ProductCategory:
        # owner, timestamps and the delete flag always come from the server
        category = ProductCategory(
            name=data.name,
            description=data.description,
            owner_id=owner_id,
            created_at=datetime.utcnow(),
            is_deleted=False,
        )
        self.db.add(category)
        await self.db.commit()
        return category

    async def update(self, owner_id: str, category_id: int, data: CategoryUpdate) -> ProductCategory:
        if data.id != category_id:
            raise ValidationError("Id in the URL does not match the body", errors={"id": ["Mismatched id"]})

        category = await self.get(owner_id, category_id)
        category.name = data.name
        category.description = data.description
        await commit_versioned(self.db, ProductCategory, owner_id, category_id, NOT_FOUND)
        return category

    async def delete(self, owner_id: str, category_id: int) -> None:
        category = await self.get(owner_id, category_id)
        category.is_deleted = True
        await commit_versioned(self.db, ProductCategory, owner_id, category_id, NOT_FOUND)
        logger.info(f"Soft-deleted product category {category_id} for user {owner_id}")
