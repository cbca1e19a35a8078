"""Subtask router. Subtasks are reached through tasks owned by the caller."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import aget_db
from app.core.security import get_current_user
from app.models.user import User
from app.repositories.SubtaskRepository import SubtaskRepository
from app.repositories.TaskRepository import TaskRepository
from app.schemas.subtaskSchema import SubtaskCreateRequest, SubtaskResponse, SubtaskUpdateRequest
from app.services.SubtaskService import SubtaskService

router = APIRouter(
    prefix="/subtasks",
    tags=["subtasks"]
)


def get_subtask_service(db: AsyncSession = Depends(aget_db)) -> SubtaskService:
    return SubtaskService(SubtaskRepository(db), TaskRepository(db))


@router.post("/task/{task_id}", response_model=SubtaskResponse, status_code=status.HTTP_201_CREATED)
async def create_subtask(
    task_id: str,
    subtask_data: SubtaskCreateRequest,
    current_user: User = Depends(get_current_user),
    subtask_service: SubtaskService = Depends(get_subtask_service)
):
    return await subtask_service.create_subtask(subtask_data.title, task_id, current_user.user_id)


@router.get("/task/{task_id}", response_model=List[SubtaskResponse])
async def get_subtasks_by_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    subtask_service: SubtaskService = Depends(get_subtask_service)
):
    return await subtask_service.get_subtasks_by_task(task_id, current_user.user_id)


@router.get("/{subtask_id}", response_model=SubtaskResponse)
async def get_subtask(
    subtask_id: str,
    current_user: User = Depends(get_current_user),
    subtask_service: SubtaskService = Depends(get_subtask_service)
):
    subtask = await subtask_service.get_subtask_by_id(subtask_id, current_user.user_id)
    if not subtask:
        raise HTTPException(status_code=404, detail=f"Subtask {subtask_id} not found")
    return subtask


@router.put("/{subtask_id}", response_model=SubtaskResponse)
async def update_subtask(
    subtask_id: str,
    subtask_data: SubtaskUpdateRequest,
    current_user: User = Depends(get_current_user),
    subtask_service: SubtaskService = Depends(get_subtask_service)
):
    subtask = await subtask_service.update_subtask(subtask_id, current_user.user_id, title=subtask_data.title)
    if not subtask:
        raise HTTPException(status_code=404, detail=f"Subtask {subtask_id} not found")
    return subtask


@router.delete("/{subtask_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subtask(
    subtask_id: str,
    current_user: User = Depends(get_current_user),
    subtask_service: SubtaskService = Depends(get_subtask_service)
):
    if not await subtask_service.delete_subtask(subtask_id, current_user.user_id):
        raise HTTPException(status_code=404, detail=f"Subtask {subtask_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
