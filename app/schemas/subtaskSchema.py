from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class SubtaskCreateRequest(BaseModel):
    title: str = Field(..., max_length=200)


class SubtaskUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=200)


class SubtaskResponse(BaseModel):
    subtask_id: str
    task_id: str
    title: str
    created_at: datetime

    class Config:
        from_attributes = True
