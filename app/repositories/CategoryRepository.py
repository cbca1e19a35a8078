"""Data access for categories."""

from typing import List

from sqlalchemy import select

from app.models.category import Category
from app.models.task import Task, TaskCategory
from app.repositories.BaseRepository import BaseRepository


class CategoryRepository(BaseRepository):
    model = Category
    id_field = "category_id"

    async def get_by_user(self, user_id: str) -> List[Category]:
        return await self._all(
            select(Category)
            .where(Category.user_id == user_id)
            .order_by(Category.category_id.desc())
        )

    async def get_by_task(self, task_id: str, user_id: str) -> List[Category]:
        """Categories attached to the task, only if the task belongs to user_id."""
        return await self._all(
            select(Category)
            .join(TaskCategory, TaskCategory.category_id == Category.category_id)
            .join(Task, Task.task_id == TaskCategory.task_id)
            .where(TaskCategory.task_id == task_id, Task.user_id == user_id)
            .order_by(Category.name)
        )

    async def name_exists(self, name: str, user_id: str) -> bool:
        return await self._exists(
            select(Category.category_id).where(
                Category.name == name,
                Category.user_id == user_id,
            )
        )
