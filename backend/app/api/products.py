"""
Products Router
CRUD over the caller's own products. Responses embed the category.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.dependencies import CurrentUser, get_current_user, get_product_repository
from app.repositories import ProductRepository
from app.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    user: CurrentUser = Depends(get_current_user),
    repo: ProductRepository = Depends(get_product_repository),
):
    return await repo.list(user.id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    user: CurrentUser = Depends(get_current_user),
    repo: ProductRepository = Depends(get_product_repository),
):
    return await repo.get(user.id, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    request: Request,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    repo: ProductRepository = Depends(get_product_repository),
):
    product = await repo.create(user.id, data)
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_product(
    product_id: int,
    data: ProductUpdate,
    user: CurrentUser = Depends(get_current_user),
    repo: ProductRepository = Depends(get_product_repository),
):
    """Replace the product's fields. The owner never changes."""
    await repo.update(user.id, product_id, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    user: CurrentUser = Depends(get_current_user),
    repo: ProductRepository = Depends(get_product_repository),
):
    await repo.delete(user.id, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
