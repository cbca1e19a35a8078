from typing import Optional
from pydantic import BaseModel, Field


class CategoryCreateRequest(BaseModel):
    """Request schema for creating a category."""
    name: str = Field(..., max_length=100)
    color: Optional[str] = Field(None, max_length=20)


class CategoryUpdateRequest(BaseModel):
    """Request schema for updating a category. Blank fields are left unchanged."""
    name: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=20)


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    color: str
    user_id: str

    class Config:
        from_attributes = True
