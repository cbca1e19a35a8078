"""Tag service - business rules for a user's tags."""

import logging
from typing import List, Optional

from app.core.exceptions import ConflictError
from app.models.tag import Tag
from app.repositories.TagRepository import TagRepository
from app.utils.validations import is_blank, require_text

logger = logging.getLogger(__name__)


class TagService:
    """Same ownership and duplicate-name rules as categories, without color."""

    def __init__(self, tag_repository: TagRepository):
        self.tag_repository = tag_repository

    async def create_tag(self, name: str, user_id: str) -> Tag:
        """
        Create a new tag for a user.

        Raises:
            InvalidArgumentError: If name or user_id is blank
            ConflictError: If the user already has a tag with this name
        """
        name = require_text(name, "Tag name")
        user_id = require_text(user_id, "User ID")

        if await self.tag_repository.name_exists(name, user_id):
            logger.warning(f"Duplicate tag name '{name}' for user {user_id}")
            raise ConflictError("A tag with the same name already exists for this user")

        tag = await self.tag_repository.create(Tag(name=name, user_id=user_id))
        logger.info(f"Tag {tag.tag_id} created for user {user_id}")
        return tag

    async def update_tag(self, tag_id: str, user_id: str, name: Optional[str] = None) -> Optional[Tag]:
        """Rename a tag owned by user_id; None if missing or not owned."""
        tag = await self.tag_repository.get_by_id(tag_id)
        if tag is None or tag.user_id != user_id:
            return None

        if not is_blank(name):
            name = name.strip()
            if name != tag.name:
                if await self.tag_repository.name_exists(name, user_id):
                    logger.warning(f"Duplicate tag name '{name}' for user {user_id}")
                    raise ConflictError("A tag with the same name already exists for this user")
                tag.name = name

        return await self.tag_repository.update(tag)

    async def delete_tag(self, tag_id: str, user_id: str) -> bool:
        tag = await self.tag_repository.get_by_id(tag_id)
        if tag is None or tag.user_id != user_id:
            return False

        deleted = await self.tag_repository.delete(tag_id)
        if deleted:
            logger.info(f"Tag {tag_id} deleted by user {user_id}")
        return deleted

    async def get_user_tags(self, user_id: str) -> List[Tag]:
        user_id = require_text(user_id, "User ID")
        return await self.tag_repository.get_by_user(user_id)

    async def get_tag_by_id(self, tag_id: str, user_id: str) -> Optional[Tag]:
        tag_id = require_text(tag_id, "Tag ID")
        user_id = require_text(user_id, "User ID")

        tag = await self.tag_repository.get_by_id(tag_id)
        return tag if tag is not None and tag.user_id == user_id else None

    async def get_tags_by_task(self, task_id: str, user_id: str) -> List[Tag]:
        task_id = require_text(task_id, "Task ID")
        user_id = require_text(user_id, "User ID")
        return await self.tag_repository.get_by_task(task_id, user_id)
