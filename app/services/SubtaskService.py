"""Subtask service - checklist items under a user's tasks."""

import logging
from typing import List, Optional

from app.core.exceptions import ConflictError, NotFoundError
from app.models.subtask import Subtask
from app.repositories.SubtaskRepository import SubtaskRepository
from app.repositories.TaskRepository import TaskRepository
from app.utils.validations import is_blank, require_text

logger = logging.getLogger(__name__)


class SubtaskService:
    """
    A subtask has no owner column; it is visible to the user owning its task.
    Every operation walks subtask -> task -> user before acting.
    """

    def __init__(self, subtask_repository: SubtaskRepository, task_repository: TaskRepository):
        self.subtask_repository = subtask_repository
        self.task_repository = task_repository

    async def _owns_task(self, task_id: str, user_id: str) -> bool:
        task = await self.task_repository.get_by_id(task_id)
        return task is not None and task.user_id == user_id

    async def _get_owned_subtask(self, subtask_id: str, user_id: str) -> Optional[Subtask]:
        subtask = await self.subtask_repository.get_by_id(subtask_id)
        if subtask is None or not await self._owns_task(subtask.task_id, user_id):
            return None
        return subtask

    async def create_subtask(self, title: str, task_id: str, user_id: str) -> Subtask:
        """
        Create a subtask under a task owned by user_id.

        Raises:
            InvalidArgumentError: If title or task_id is blank
            NotFoundError: If the task does not exist or belongs to another user
            ConflictError: If the task already has a subtask with this title
        """
        title = require_text(title, "Subtask title")
        task_id = require_text(task_id, "Task ID")

        if not await self._owns_task(task_id, user_id):
            logger.warning(f"Subtask rejected: task {task_id} not found for user {user_id}")
            raise NotFoundError("Task not found")

        if await self.subtask_repository.title_exists(title, task_id):
            raise ConflictError(f"A subtask with the title '{title}' already exists for this task")

        subtask = await self.subtask_repository.create(Subtask(title=title, task_id=task_id))
        logger.info(f"Subtask {subtask.subtask_id} created on task {task_id}")
        return subtask

    async def update_subtask(self, subtask_id: str, user_id: str, title: Optional[str] = None) -> Optional[Subtask]:
        subtask = await self._get_owned_subtask(subtask_id, user_id)
        if subtask is None:
            return None

        if not is_blank(title):
            subtask.title = title.strip()

        return await self.subtask_repository.update(subtask)

    async def delete_subtask(self, subtask_id: str, user_id: str) -> bool:
        subtask = await self._get_owned_subtask(subtask_id, user_id)
        if subtask is None:
            return False

        deleted = await self.subtask_repository.delete(subtask_id)
        if deleted:
            logger.info(f"Subtask {subtask_id} deleted by user {user_id}")
        return deleted

    async def get_subtasks_by_task(self, task_id: str, user_id: str) -> List[Subtask]:
        if not await self._owns_task(task_id, user_id):
            return []
        return await self.subtask_repository.get_by_task(task_id)

    async def get_subtask_by_id(self, subtask_id: str, user_id: str) -> Optional[Subtask]:
        return await self._get_owned_subtask(subtask_id, user_id)
