"""
Catalog Models
Product categories and products, both owned by a user and soft-deleted.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.database import Base


class ProductCategory(Base):
    """
    A user's product category.
    Rows are never removed; deletion sets is_deleted.
    """
    __tablename__ = "product_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    owner = relationship("User", lazy="raise")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index('ix_product_categories_owner', 'owner_id', 'is_deleted'),
    )

    def __repr__(self):
        return f"<ProductCategory(id={self.id}, name='{self.name}', owner_id='{self.owner_id}')>"


class Product(Base):
    """
    A user's product. Always references a category.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    image_url = Column(String(512), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # RESTRICT: a category never takes its products with it
    category_id = Column(Integer, ForeignKey("product_categories.id", ondelete="RESTRICT"), nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    category = relationship("ProductCategory", lazy="selectin")
    owner = relationship("User", lazy="raise")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index('ix_products_owner', 'owner_id', 'is_deleted'),
        Index('ix_products_created_at', 'created_at'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', owner_id='{self.owner_id}')>"
