from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import aget_db
from app.core.security import get_current_user
from app.models.user import User
from app.repositories.TagRepository import TagRepository
from app.schemas.tagSchema import TagCreateRequest, TagResponse, TagUpdateRequest
from app.services.TagService import TagService

router = APIRouter(
    prefix="/tags",
    tags=["tags"]
)


def get_tag_service(db: AsyncSession = Depends(aget_db)) -> TagService:
    return TagService(TagRepository(db))


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreateRequest,
    current_user: User = Depends(get_current_user),
    tag_service: TagService = Depends(get_tag_service)
):
    return await tag_service.create_tag(tag_data.name, current_user.user_id)


@router.get("/user", response_model=List[TagResponse])
async def get_user_tags(
    current_user: User = Depends(get_current_user),
    tag_service: TagService = Depends(get_tag_service)
):
    return await tag_service.get_user_tags(current_user.user_id)


@router.get("/task/{task_id}", response_model=List[TagResponse])
async def get_tags_by_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    tag_service: TagService = Depends(get_tag_service)
):
    """Tags attached to a task, empty when the task is not the caller's."""
    return await tag_service.get_tags_by_task(task_id, current_user.user_id)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: str,
    current_user: User = Depends(get_current_user),
    tag_service: TagService = Depends(get_tag_service)
):
    tag = await tag_service.get_tag_by_id(tag_id, current_user.user_id)
    if not tag:
        raise HTTPException(status_code=404, detail=f"Tag {tag_id} not found")
    return tag


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: str,
    tag_data: TagUpdateRequest,
    current_user: User = Depends(get_current_user),
    tag_service: TagService = Depends(get_tag_service)
):
    tag = await tag_service.update_tag(tag_id, current_user.user_id, name=tag_data.name)
    if not tag:
        raise HTTPException(status_code=404, detail=f"Tag {tag_id} not found")
    return tag


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    current_user: User = Depends(get_current_user),
    tag_service: TagService = Depends(get_tag_service)
):
    if not await tag_service.delete_tag(tag_id, current_user.user_id):
        raise HTTPException(status_code=404, detail=f"Tag {tag_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
