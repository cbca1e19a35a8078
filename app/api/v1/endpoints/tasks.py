"""Task management router for the Task Board API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import aget_db
from app.core.security import get_current_user
from app.models.user import User
from app.repositories.CategoryRepository import CategoryRepository
from app.repositories.TagRepository import TagRepository
from app.repositories.TaskRepository import TaskRepository
from app.schemas.taskSchema import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from app.services.TaskService import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"]
)


def get_task_service(db: AsyncSession = Depends(aget_db)) -> TaskService:
    return TaskService(TaskRepository(db), CategoryRepository(db), TagRepository(db))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreateRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """
    Create a new task for the current user.
    Titles are unique per user, ignoring case.
    """
    task = await task_service.create_task(
        task_data.title,
        current_user.user_id,
        description=task_data.description,
        due_date=task_data.due_date,
        status=task_data.status,
    )
    response.headers["Location"] = f"/api/tasks/{task.task_id}"
    return task


@router.get("/user", response_model=List[TaskResponse])
async def get_user_tasks(
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """Get every task of the current user with subtasks, categories and tags."""
    return await task_service.get_user_tasks(current_user.user_id)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    task = await task_service.get_task_by_id(task_id, current_user.user_id)
    if not task:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdateRequest,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """
    Update a task.
    Only fields present in the body are applied.
    """
    updates = task_data.model_dump(exclude_unset=True)
    task = await task_service.update_task(task_id, current_user.user_id, **updates)
    if not task:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """Delete a task together with its subtasks and tag/category links."""
    if not await task_service.delete_task(task_id, current_user.user_id):
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/tags/{tag_id}", response_model=TaskResponse)
async def add_tag_to_task(
    task_id: str,
    tag_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    return await task_service.add_tag_to_task(task_id, tag_id, current_user.user_id)


@router.delete("/{task_id}/tags/{tag_id}", response_model=TaskResponse)
async def remove_tag_from_task(
    task_id: str,
    tag_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    return await task_service.remove_tag_from_task(task_id, tag_id, current_user.user_id)


@router.post("/{task_id}/categories/{category_id}", response_model=TaskResponse)
async def add_category_to_task(
    task_id: str,
    category_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    return await task_service.add_category_to_task(task_id, category_id, current_user.user_id)


@router.delete("/{task_id}/categories/{category_id}", response_model=TaskResponse)
async def remove_category_from_task(
    task_id: str,
    category_id: str,
    current_user: User = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    return await task_service.remove_category_from_task(task_id, category_id, current_user.user_id)
