"""
Dashboard API
Aggregate catalog statistics. Administrators see every user's data,
everyone else sees only their own.
"""

from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import CurrentUser, get_current_user
from app.database import get_db
from app.models.catalog import Product, ProductCategory
from app.models.user import User
from app.schemas.dashboard import DashboardStats, RecentProduct, RecentUser

router = APIRouter()

RECENT_PRODUCTS = 5
RECENT_USERS = 2


def _decimal(value, places: str = "0.01") -> Decimal:
    if value is None:
        return Decimal("0").quantize(Decimal(places))
    return Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


@router.get("", response_model=DashboardStats)
async def get_dashboard(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get overview statistics for the dashboard."""
    product_filters = [Product.is_deleted.is_(False)]
    category_filters = [ProductCategory.is_deleted.is_(False)]
    if not user.is_admin:
        product_filters.append(Product.owner_id == user.id)
        category_filters.append(ProductCategory.owner_id == user.id)

    total_products = (await db.execute(
        select(func.count(Product.id)).where(*product_filters)
    )).scalar() or 0

    total_categories = (await db.execute(
        select(func.count(ProductCategory.id)).where(*category_filters)
    )).scalar() or 0

    active_products = (await db.execute(
        select(func.count(Product.id)).where(*product_filters, Product.is_active.is_(True))
    )).scalar() or 0

    total_value, average_price = (await db.execute(
        select(func.sum(Product.price), func.avg(Product.price)).where(*product_filters)
    )).one()

    active_percentage = round(active_products / total_products * 100) if total_products > 0 else 0
    per_category = (
        _decimal(Decimal(total_products) / Decimal(total_categories), "0.1")
        if total_categories > 0 else _decimal(0, "0.1")
    )

    recent_rows = (await db.execute(
        select(Product, User.username)
        .join(User, Product.owner_id == User.id)
        .where(*product_filters)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(RECENT_PRODUCTS)
    )).all()
    recent_products = [
        RecentProduct(
            id=product.id,
            name=product.name,
            price=product.price,
            is_active=product.is_active,
            created_at=product.created_at,
            category_name=product.category.name if product.category else None,
            owner_username=username,
        )
        for product, username in recent_rows
    ]

    recent_users = []
    if user.is_admin:
        user_rows = (await db.execute(
            select(User.username, User.created_at)
            .order_by(User.created_at.desc())
            .limit(RECENT_USERS)
        )).all()
        recent_users = [RecentUser(username=name, created_at=created) for name, created in user_rows]

    return DashboardStats(
        total_products=total_products,
        total_categories=total_categories,
        active_products=active_products,
        active_products_percentage=active_percentage,
        total_inventory_value=_decimal(total_value),
        average_product_price=_decimal(average_price),
        products_per_category=per_category,
        recent_products=recent_products,
        recent_users=recent_users,
        is_admin_view=user.is_admin,
    )
