"""Task service — per-user task CRUD on top of the document store.

Every operation is scoped to the acting user: another user's task is
reported as "not found" rather than "forbidden", so ids don't leak.
"""

import uuid
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.db.documents import DocumentStore
from taskledger.db.models import Task, User
from taskledger.errors import NotFound

logger = structlog.get_logger()


class TaskNotFound(NotFound):
    message = "Task not found"


class TaskService:
    """Business logic for task CRUD."""

    def __init__(self, db: AsyncSession):
        self.tasks = DocumentStore(db, Task)

    async def list_tasks(self, owner: User) -> list[Task]:
        return await self.tasks.find({"user_id": owner.id}, order_by="created_at")

    async def create_task(self, owner: User, fields: dict[str, Any]) -> Task:
        """Owner id and name come from the session, never from the body."""
        task = await self.tasks.insert(
            **fields, user_id=owner.id, user_name=owner.username
        )
        logger.info("task.created", task_id=str(task.id))
        return task

    async def update_task(
        self, owner: User, task_id: uuid.UUID, fields: dict[str, Any]
    ) -> Task:
        await self._get_owned(owner, task_id)
        task = await self.tasks.find_by_id_and_update(task_id, fields)
        if not task:
            raise TaskNotFound()
        return task

    async def delete_task(self, owner: User, task_id: uuid.UUID) -> None:
        await self._get_owned(owner, task_id)
        if not await self.tasks.find_by_id_and_delete(task_id):
            raise TaskNotFound()
        logger.info("task.deleted", task_id=str(task_id))

    async def _get_owned(self, owner: User, task_id: uuid.UUID) -> Task:
        task = await self.tasks.find_by_id(task_id)
        if not task or task.user_id != owner.id:
            raise TaskNotFound()
        return task
