"""
Product Categories Router
CRUD over the caller's own product categories.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.dependencies import CurrentUser, get_category_repository, get_current_user
from app.repositories import CategoryRepository
from app.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    user: CurrentUser = Depends(get_current_user),
    repo: CategoryRepository = Depends(get_category_repository),
):
    return await repo.list(user.id)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    user: CurrentUser = Depends(get_current_user),
    repo: CategoryRepository = Depends(get_category_repository),
):
    return await repo.get(user.id, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    request: Request,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    repo: CategoryRepository = Depends(get_category_repository),
):
    """The owner is always the caller; a client-supplied owner_id is discarded."""
    category = await repo.create(user.id, data)
    response.headers["Location"] = str(request.url_for("get_category", category_id=category.id))
    return category


@router.put("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    user: CurrentUser = Depends(get_current_user),
    repo: CategoryRepository = Depends(get_category_repository),
):
    await repo.update(user.id, category_id, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    user: CurrentUser = Depends(get_current_user),
    repo: CategoryRepository = Depends(get_category_repository),
):
    """Soft-delete. Products in the category are left untouched."""
    await repo.delete(user.id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
