"""Task model and its many-to-many join tables."""

from sqlalchemy import Column, Text, String, DateTime, Enum as SQLEnum, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from app.constants.constants import TaskStatus
from app.models.base import Base, TimestampMixin, generate_id


class Task(Base, TimestampMixin):
    """Model representing a task owned by a user."""

    __tablename__ = "tasks"
    task_id = Column(String(36), primary_key=True, index=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime, nullable=True)
    status = Column(
        SQLEnum(TaskStatus, name="task_status", values_callable=lambda enum: [m.value for m in enum]),
        default=TaskStatus.non_started,
        nullable=False,
    )
    user = relationship("User", back_populates="tasks")
    subtasks = relationship(
        "Subtask",
        back_populates="task",
        passive_deletes=True,
        order_by="Subtask.created_at",
    )
    # Join rows are written through TaskRepository only
    categories = relationship("Category", secondary="task_categories", viewonly=True, order_by="Category.name")
    tags = relationship("Tag", secondary="task_tags", viewonly=True, order_by="Tag.name")


# Titles are unique per user ignoring case
Index("uq_tasks_user_title_ci", Task.user_id, func.lower(Task.title), unique=True)


class TaskCategory(Base):
    """Association between a task and a category."""

    __tablename__ = "task_categories"
    task_id = Column(String(36), ForeignKey("tasks.task_id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(String(36), ForeignKey("categories.category_id", ondelete="CASCADE"), primary_key=True)


class TaskTag(Base):
    """Association between a task and a tag."""

    __tablename__ = "task_tags"
    task_id = Column(String(36), ForeignKey("tasks.task_id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(String(36), ForeignKey("tags.tag_id", ondelete="CASCADE"), primary_key=True)
