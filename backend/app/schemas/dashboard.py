from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class RecentProduct(BaseModel):
    id: int
    name: str
    price: Decimal
    is_active: bool
    created_at: datetime
    category_name: Optional[str] = None
    owner_username: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RecentUser(BaseModel):
    username: str
    created_at: datetime


class DashboardStats(BaseModel):
    total_products: int
    total_categories: int
    active_products: int
    active_products_percentage: int
    total_inventory_value: Decimal
    average_product_price: Decimal
    products_per_category: Decimal
    recent_products: List[RecentProduct]
    recent_users: List[RecentUser] = []
    is_admin_view: bool
