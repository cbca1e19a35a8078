"""Category service - business rules for a user's categories."""

import logging
from typing import List, Optional

from app.core.exceptions import ConflictError
from app.models.category import Category
from app.repositories.CategoryRepository import CategoryRepository
from app.utils.validations import is_blank, normalize_color, require_text

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Orchestrates category operations on top of the category repository.

    Ownership mismatches are reported exactly like missing rows (``None`` or
    ``False``) so callers cannot probe another user's categories.
    """

    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def create_category(self, name: str, color: Optional[str], user_id: str) -> Category:
        """
        Create a new category for a user.

        Args:
            name: Category name, trimmed before storing
            color: Optional hex color; invalid or blank values become white
            user_id: Owner of the category

        Returns:
            The persisted Category

        Raises:
            InvalidArgumentError: If name or user_id is blank
            ConflictError: If the user already has a category with this name
        """
        name = require_text(name, "Category name")
        user_id = require_text(user_id, "User ID")

        if await self.category_repository.name_exists(name, user_id):
            logger.warning(f"Duplicate category name '{name}' for user {user_id}")
            raise ConflictError("A category with the same name already exists for this user")

        category = Category(name=name, color=normalize_color(color), user_id=user_id)
        category = await self.category_repository.create(category)
        logger.info(f"Category {category.category_id} created for user {user_id}")
        return category

    async def update_category(
        self,
        category_id: str,
        user_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Optional[Category]:
        """
        Update name and/or color of a category owned by user_id.

        Blank values mean "leave unchanged", including a blank color.

        Returns:
            The updated Category, or None if missing or owned by someone else
        """
        category = await self.category_repository.get_by_id(category_id)
        if category is None or category.user_id != user_id:
            return None

        if not is_blank(name):
            name = name.strip()
            if name != category.name:
                if await self.category_repository.name_exists(name, user_id):
                    logger.warning(f"Duplicate category name '{name}' for user {user_id}")
                    raise ConflictError("A category with the same name already exists for this user")
                category.name = name

        if not is_blank(color):
            category.color = normalize_color(color)

        return await self.category_repository.update(category)

    async def delete_category(self, category_id: str, user_id: str) -> bool:
        category = await self.category_repository.get_by_id(category_id)
        if category is None or category.user_id != user_id:
            return False

        deleted = await self.category_repository.delete(category_id)
        if deleted:
            logger.info(f"Category {category_id} deleted by user {user_id}")
        return deleted

    async def get_user_categories(self, user_id: str) -> List[Category]:
        user_id = require_text(user_id, "User ID")
        return await self.category_repository.get_by_user(user_id)

    async def get_category_by_id(self, category_id: str, user_id: str) -> Optional[Category]:
        category_id = require_text(category_id, "Category ID")
        user_id = require_text(user_id, "User ID")

        category = await self.category_repository.get_by_id(category_id)
        if category is None or category.user_id != user_id:
            return None
        return category

    async def get_categories_by_task(self, task_id: str, user_id: str) -> List[Category]:
        task_id = require_text(task_id, "Task ID")
        user_id = require_text(user_id, "User ID")
        return await self.category_repository.get_by_task(task_id, user_id)
