"""Category router. Every route is scoped to the authenticated user."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import aget_db
from app.core.security import get_current_user
from app.models.user import User
from app.repositories.CategoryRepository import CategoryRepository
from app.schemas.categorySchema import CategoryCreateRequest, CategoryResponse, CategoryUpdateRequest
from app.services.CategoryService import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["categories"]
)


def get_category_service(db: AsyncSession = Depends(aget_db)) -> CategoryService:
    return CategoryService(CategoryRepository(db))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreateRequest,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    """Create a category. A missing or malformed color falls back to white."""
    return await category_service.create_category(
        category_data.name, category_data.color, current_user.user_id
    )


@router.get("/user", response_model=List[CategoryResponse])
async def get_user_categories(
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    return await category_service.get_user_categories(current_user.user_id)


@router.get("/task/{task_id}", response_model=List[CategoryResponse])
async def get_categories_by_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    return await category_service.get_categories_by_task(task_id, current_user.user_id)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    category = await category_service.get_category_by_id(category_id, current_user.user_id)
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    category_data: CategoryUpdateRequest,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    category = await category_service.update_category(
        category_id,
        current_user.user_id,
        name=category_data.name,
        color=category_data.color,
    )
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    current_user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    if not await category_service.delete_category(category_id, current_user.user_id):
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
