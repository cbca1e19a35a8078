from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.constants.constants import TaskStatus
from app.schemas.categorySchema import CategoryResponse
from app.schemas.subtaskSchema import SubtaskResponse
from app.schemas.tagSchema import TagResponse


class TaskCreateRequest(BaseModel):
    """Request schema for creating a new task."""
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[datetime] = None
    status: Optional[str] = None


class TaskUpdateRequest(BaseModel):
    """
    Request schema for updating a task.
    Omitted fields are untouched; an empty description clears it.
    """
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[datetime] = None
    status: Optional[str] = None


class TaskResponse(BaseModel):
    task_id: str
    user_id: str
    title: str
    description: Optional[str]
    due_date: Optional[datetime]
    status: TaskStatus
    created_at: datetime
    subtasks: List[SubtaskResponse] = []
    categories: List[CategoryResponse] = []
    tags: List[TagResponse] = []

    class Config:
        from_attributes = True
