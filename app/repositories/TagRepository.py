"""Data access for tags."""

from typing import List

from sqlalchemy import select

from app.models.tag import Tag
from app.models.task import Task, TaskTag
from app.repositories.BaseRepository import BaseRepository


class TagRepository(BaseRepository):
    model = Tag
    id_field = "tag_id"

    async def get_by_user(self, user_id: str) -> List[Tag]:
        return await self._all(
            select(Tag)
            .where(Tag.user_id == user_id)
            .order_by(Tag.tag_id.desc())
        )

    async def get_by_task(self, task_id: str, user_id: str) -> List[Tag]:
        """Tags attached to the task, only if the task belongs to user_id."""
        return await self._all(
            select(Tag)
            .join(TaskTag, TaskTag.tag_id == Tag.tag_id)
            .join(Task, Task.task_id == TaskTag.task_id)
            .where(TaskTag.task_id == task_id, Task.user_id == user_id)
            .order_by(Tag.name)
        )

    async def name_exists(self, name: str, user_id: str) -> bool:
        return await self._exists(
            select(Tag.tag_id).where(Tag.name == name, Tag.user_id == user_id)
        )
