"""
Product Repository
Owner-scoped access to products. Products are returned with their category.
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, ValidationError
from app.models.catalog import Product, ProductCategory
from app.repositories.scoping import commit_versioned, owned_by
from app.schemas.catalog import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

NOT_FOUND = "Product not found"


class ProductRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, owner_id: str) -> List[Product]:
        result = await self.db.execute(
            select(Product)
            .where(owned_by(Product, owner_id))
            .order_by(Product.id)
        )
        return list(result.scalars().all())

    async def get(self, owner_id: str, product_id: int) -> Product:
        result = await self.db.execute(
            select(Product).where(
                Product.id == product_id,
                owned_by(Product, owner_id),
            )
        )
        product = result.scalar_one_or_none()
        if product is None:
            raise NotFoundError(NOT_FOUND)
        return product

    async def create(self, owner_id: str, data: ProductCreate) -> Product:
        await self._require_category(data.category_id)
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            image_url=data.image_url,
            is_active=data.is_active,
            category_id=data.category_id,
            owner_id=owner_id,
            created_at=datetime.utcnow(),
            is_deleted=False,
        )
        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product, attribute_names=["category"])
        return product

    async def update(self, owner_id: str, product_id: int, data: ProductUpdate) -> Product:
        if data.id != product_id:
            raise ValidationError("Id in the URL does not match the body", errors={"id": ["Mismatched id"]})

        product = await self.get(owner_id, product_id)
        await self._require_category(data.category_id)

        product.name = data.name
        product.description = data.description
        product.price = data.price
        product.image_url = data.image_url
        product.is_active = data.is_active
        product.category_id = data.category_id
        await commit_versioned(self.db, Product, owner_id, product_id, NOT_FOUND)
        await self.db.refresh(product, attribute_names=["category"])
        return product

    async def delete(self, owner_id: str, product_id: int) -> None:
        product = await self.get(owner_id, product_id)
        product.is_deleted = True
        await commit_versioned(self.db, Product, owner_id, product_id, NOT_FOUND)
        logger.info(f"Soft-deleted product {product_id} for user {owner_id}")

    async def _require_category(self, category_id: int) -> None:
        # Any owner's live category is accepted
        result = await self.db.execute(
            select(ProductCategory.id).where(
                ProductCategory.id == category_id,
                ProductCategory.is_deleted.is_(False),
            )
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError(
                "Category does not exist",
                errors={"category_id": ["Category does not exist"]},
            )
