"""Data access for tasks and their tag/category associations."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.core.exceptions import ConflictError, InvalidStateError
from app.models.task import Task, TaskCategory, TaskTag
from app.repositories.BaseRepository import BaseRepository


class TaskRepository(BaseRepository):
    model = Task
    id_field = "task_id"

    def _with_details(self, query):
        # populate_existing refreshes collections of tasks already in the session
        return query.options(
            selectinload(Task.subtasks),
            selectinload(Task.categories),
            selectinload(Task.tags),
        ).execution_options(populate_existing=True)

    async def get_by_user(self, user_id: str, details: bool = False) -> List[Task]:
        """Newest first; details=True also loads subtasks, categories and tags."""
        query = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.created_at.desc())
        )
        return await self._all(self._with_details(query) if details else query)

    async def get_with_details(self, task_id: str) -> Optional[Task]:
        result = await self.db.execute(
            self._with_details(select(Task).where(Task.task_id == task_id))
        )
        return result.scalar_one_or_none()

    async def title_exists(self, title: str, user_id: str) -> bool:
        """Case-insensitive title lookup within one user's tasks."""
        return await self._exists(
            select(Task.task_id).where(
                func.lower(Task.title) == title.strip().lower(),
                Task.user_id == user_id,
            )
        )

    # ------------------------------
    # Tag associations
    # ------------------------------
    async def _get_task_tag(self, task_id: str, tag_id: str) -> Optional[TaskTag]:
        result = await self.db.execute(
            select(TaskTag).where(TaskTag.task_id == task_id, TaskTag.tag_id == tag_id)
        )
        return result.scalar_one_or_none()

    async def has_tag(self, task_id: str, tag_id: str) -> bool:
        return await self._get_task_tag(task_id, tag_id) is not None

    async def add_tag(self, task_id: str, tag_id: str) -> None:
        if await self.has_tag(task_id, tag_id):
            raise ConflictError("The tag is already associated with the task")
        self.db.add(TaskTag(task_id=task_id, tag_id=tag_id))
        await self._flush()

    async def remove_tag(self, task_id: str, tag_id: str) -> None:
        task_tag = await self._get_task_tag(task_id, tag_id)
        if task_tag is None:
            raise InvalidStateError("The tag is not associated with the task")
        await self.db.delete(task_tag)
        await self._flush()

    # ------------------------------
    # Category associations
    # ------------------------------
    async def _get_task_category(self, task_id: str, category_id: str) -> Optional[TaskCategory]:
        result = await self.db.execute(
            select(TaskCategory).where(
                TaskCategory.task_id == task_id,
                TaskCategory.category_id == category_id,
            )
        )
        return result.scalar_one_or_none()

    async def has_category(self, task_id: str, category_id: str) -> bool:
        return await self._get_task_category(task_id, category_id) is not None

    async def add_category(self, task_id: str, category_id: str) -> None:
        if await self.has_category(task_id, category_id):
            raise ConflictError("The category is already associated with the task")
        self.db.add(TaskCategory(task_id=task_id, category_id=category_id))
        await self._flush()

    async def remove_category(self, task_id: str, category_id: str) -> None:
        task_category = await self._get_task_category(task_id, category_id)
        if task_category is None:
            raise InvalidStateError("The category is not associated with the task")
        await self.db.delete(task_category)
        await self._flush()
