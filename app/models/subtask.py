"""Subtask model: a checklist item belonging to exactly one task."""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base, generate_id


class Subtask(Base):
    __tablename__ = "subtasks"
    subtask_id = Column(String(36), primary_key=True, index=True, default=generate_id)
    task_id = Column(String(36), ForeignKey("tasks.task_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    task = relationship("Task", back_populates="subtasks")
