"""Task service - business rules for tasks and their tag/category links."""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from app.constants.constants import TaskStatus
from app.core.exceptions import ConflictError, NotFoundError
from app.models.task import Task
from app.repositories.CategoryRepository import CategoryRepository
from app.repositories.TagRepository import TagRepository
from app.repositories.TaskRepository import TaskRepository
from app.utils.validations import is_blank, require_text

logger = logging.getLogger(__name__)

# Marks an update argument that was not provided, as opposed to an explicit None
UNSET = object()


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Due dates are stored as naive UTC timestamps."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskService:
    """
    Service for task business logic.

    Every returned task has its subtasks, categories and tags loaded so it
    can be serialized outside the session.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
    ):
        self.task_repository = task_repository
        self.category_repository = category_repository
        self.tag_repository = tag_repository

    async def create_task(
        self,
        title: str,
        user_id: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        status: Optional[Union[TaskStatus, str]] = None,
    ) -> Task:
        """
        Create a task for a user.

        Args:
            title: Task title, unique per user ignoring case
            user_id: Owner of the task
            description: Optional free text
            due_date: Optional deadline
            status: Optional initial status, defaults to "Non Started"

        Returns:
            The created Task with its (empty) relations loaded

        Raises:
            InvalidArgumentError: On blank title/user_id or unknown status
            ConflictError: If the user already has a task with this title
        """
        title = require_text(title, "Task title")
        user_id = require_text(user_id, "User ID")
        task_status = TaskStatus.non_started if is_blank(status) else TaskStatus.parse(status)

        if await self.task_repository.title_exists(title, user_id):
            logger.warning(f"Duplicate task title '{title}' for user {user_id}")
            raise ConflictError("A task with the same title already exists for this user")

        task = Task(
            title=title,
            description=None if is_blank(description) else description.strip(),
            due_date=_to_naive_utc(due_date),
            status=task_status,
            user_id=user_id,
        )
        task = await self.task_repository.create(task)
        logger.info(f"Task {task.task_id} created for user {user_id}")
        return await self.task_repository.get_with_details(task.task_id)

    async def update_task(
        self,
        task_id: str,
        user_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        due_date: Optional[datetime] = UNSET,
        status: Optional[Union[TaskStatus, str]] = None,
    ) -> Optional[Task]:
        """
        Partially update a task. ``None`` means "not provided", except for due_date.

        A blank title or status leaves the field unchanged, while an empty
        description clears it. due_date defaults to UNSET; an explicit None
        clears the due date.

        Returns:
            The updated Task, or None if the task belongs to another user

        Raises:
            NotFoundError: If the task does not exist
            ConflictError: If the new title is used by another of the user's tasks
            InvalidArgumentError: If the status is unknown
        """
        task = await self.task_repository.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        if task.user_id != user_id:
            return None

        if not is_blank(title):
            title = title.strip()
            if title.lower() != task.title.lower():
                if await self.task_repository.title_exists(title, user_id):
                    logger.warning(f"Duplicate task title '{title}' for user {user_id}")
                    raise ConflictError("A task with the same title already exists for this user")
            task.title = title

        if description is not None:
            task.description = description.strip() or None

        if due_date is not UNSET:
            task.due_date = _to_naive_utc(due_date)

        if not is_blank(status):
            task.status = TaskStatus.parse(status)

        await self.task_repository.update(task)
        return await self.task_repository.get_with_details(task_id)

    async def delete_task(self, task_id: str, user_id: str) -> bool:
        """Delete a task with its subtasks and associations; False if missing or not owned."""
        task = await self.task_repository.get_by_id(task_id)
        if task is None or task.user_id != user_id:
            return False

        deleted = await self.task_repository.delete(task_id)
        if deleted:
            logger.info(f"Task {task_id} deleted by user {user_id}")
        return deleted

    async def get_user_tasks(self, user_id: str) -> List[Task]:
        user_id = require_text(user_id, "User ID")
        return await self.task_repository.get_by_user(user_id, details=True)

    async def get_task_by_id(self, task_id: str, user_id: str) -> Optional[Task]:
        task_id = require_text(task_id, "Task ID")
        user_id = require_text(user_id, "User ID")

        task = await self.task_repository.get_with_details(task_id)
        return task if task is not None and task.user_id == user_id else None

    async def task_title_exists(self, title: str, user_id: str) -> bool:
        title = require_text(title, "Title")
        user_id = require_text(user_id, "User ID")
        return await self.task_repository.title_exists(title, user_id)

    # ------------------------------
    # Relationship management
    # ------------------------------
    async def _require_owned_task(self, task_id: str, user_id: str) -> Task:
        task = await self.task_repository.get_by_id(task_id)
        if task is None or task.user_id != user_id:
            logger.warning(f"Task {task_id} not found for user {user_id}")
            raise NotFoundError("Task not found")
        return task

    async def _require_owned_tag(self, tag_id: str, user_id: str) -> None:
        tag = await self.tag_repository.get_by_id(tag_id)
        if tag is None or tag.user_id != user_id:
            logger.warning(f"Tag {tag_id} not found for user {user_id}")
            raise NotFoundError("Tag not found")

    async def _require_owned_category(self, category_id: str, user_id: str) -> None:
        category = await self.category_repository.get_by_id(category_id)
        if category is None or category.user_id != user_id:
            logger.warning(f"Category {category_id} not found for user {user_id}")
            raise NotFoundError("Category not found")

    async def add_tag_to_task(self, task_id: str, tag_id: str, user_id: str) -> Task:
        """
        Attach a tag to a task.

        Raises:
            NotFoundError: If the task or tag is missing or not owned by user_id
            ConflictError: If the tag is already attached
        """
        await self._require_owned_task(task_id, user_id)
        await self._require_owned_tag(tag_id, user_id)

        await self.task_repository.add_tag(task_id, tag_id)
        logger.info(f"Tag {tag_id} added to task {task_id}")
        return await self.task_repository.get_with_details(task_id)

    async def remove_tag_from_task(self, task_id: str, tag_id: str, user_id: str) -> Task:
        """
        Detach a tag from a task.

        Raises:
            NotFoundError: If the task or tag is missing or not owned by user_id
            InvalidStateError: If the tag is not attached
        """
        await self._require_owned_task(task_id, user_id)
        await self._require_owned_tag(tag_id, user_id)

        await self.task_repository.remove_tag(task_id, tag_id)
        logger.info(f"Tag {tag_id} removed from task {task_id}")
        return await self.task_repository.get_with_details(task_id)

    async def add_category_to_task(self, task_id: str, category_id: str, user_id: str) -> Task:
        await self._require_owned_task(task_id, user_id)
        await self._require_owned_category(category_id, user_id)

        await self.task_repository.add_category(task_id, category_id)
        logger.info(f"Category {category_id} added to task {task_id}")
        return await self.task_repository.get_with_details(task_id)

    async def remove_category_from_task(self, task_id: str, category_id: str, user_id: str) -> Task:
        await self._require_owned_task(task_id, user_id)
        await self._require_owned_category(category_id, user_id)

        await self.task_repository.remove_category(task_id, category_id)
        logger.info(f"Category {category_id} removed from task {task_id}")
        return await self.task_repository.get_with_details(task_id)
