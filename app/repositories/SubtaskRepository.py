"""Data access for subtasks."""

from typing import List

from sqlalchemy import select

from app.models.subtask import Subtask
from app.repositories.BaseRepository import BaseRepository


class SubtaskRepository(BaseRepository):
    model = Subtask
    id_field = "subtask_id"

    async def get_by_task(self, task_id: str) -> List[Subtask]:
        return await self._all(
            select(Subtask)
            .where(Subtask.task_id == task_id)
            .order_by(Subtask.created_at, Subtask.subtask_id)
        )

    async def title_exists(self, title: str, task_id: str) -> bool:
        return await self._exists(
            select(Subtask.subtask_id).where(
                Subtask.title == title,
                Subtask.task_id == task_id,
            )
        )
