"""
Owner-scoped repositories for catalog data.
"""

from app.repositories.categories import CategoryRepository
from app.repositories.products import ProductRepository

__all__ = ["CategoryRepository", "ProductRepository"]
