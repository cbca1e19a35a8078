from typing import Optional
from pydantic import BaseModel, Field


class TagCreateRequest(BaseModel):
    name: str = Field(..., max_length=100)


class TagUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=100)


class TagResponse(BaseModel):
    tag_id: str
    name: str
    user_id: str

    class Config:
        from_attributes = True
