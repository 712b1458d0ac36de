"""Task API routes.

Routes translate HTTP to TaskService calls; ownership and not-found
handling live in the service. All routes here sit behind the auth gate
(see api/__init__.py).
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.auth.dependencies import get_current_principal
from taskledger.db.engine import get_db
from taskledger.db.models import User
from taskledger.schemas.auth import Message
from taskledger.schemas.task import TaskCreate, TaskRead, TaskUpdate
from taskledger.services.task_service import TaskService

router = APIRouter()


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(
    principal: User = Depends(get_current_principal),
    svc: TaskService = Depends(_task_svc),
):
    """List the current user's tasks, oldest first."""
    return await svc.list_tasks(principal)


@router.post("/tasks", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    principal: User = Depends(get_current_principal),
    svc: TaskService = Depends(_task_svc),
):
    return await svc.create_task(principal, body.model_dump())


@router.put("/tasks/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: uuid.UUID,
    body: TaskUpdate,
    principal: User = Depends(get_current_principal),
    svc: TaskService = Depends(_task_svc),
):
    """Update the fields present in the body; returns the updated task."""
    return await svc.update_task(principal, task_id, body.model_dump(exclude_unset=True))


@router.delete("/tasks/{task_id}", response_model=Message)
async def delete_task(
    task_id: uuid.UUID,
    principal: User = Depends(get_current_principal),
    svc: TaskService = Depends(_task_svc),
):
    await svc.delete_task(principal, task_id)
    return Message(message="Task deleted")
