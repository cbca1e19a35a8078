"""Data access for user accounts."""

from typing import Optional

from sqlalchemy import func, select

from app.models.task import Task
from app.models.user import User
from app.repositories.BaseRepository import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository):
    model = User
    id_field = "user_id"

    async def create(self, user: User) -> User:
        user.email = normalize_email(user.email)
        user.username = user.username.strip()
        return await super().create(user)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def exists(self, user_id: str) -> bool:
        return await self._exists(select(User.user_id).where(User.user_id == user_id))

    async def get_task_count(self, user_id: str) -> int:
        result = await self.db.execute(
            select(func.count(Task.task_id)).where(Task.user_id == user_id)
        )
        return result.scalar_one()
