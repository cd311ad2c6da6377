"""
Catalog Manager Database Models
Exports all models for use throughout the application.
"""

from app.models.user import User, Role, user_roles
from app.models.catalog import ProductCategory, Product

__all__ = [
    "User",
    "Role",
    "user_roles",
    "ProductCategory",
    "Product",
]
