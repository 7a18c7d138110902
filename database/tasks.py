"""
Task ownership store.

Every function takes the owning user's id explicitly and filters on it, so a
task is never readable or writable through another owner's scope.  Each
call is a single statement.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundError, StorageError
from database.models import Task

logger = logging.getLogger(__name__)


async def create_task(
    session: AsyncSession,
    owner_id: int,
    *,
    title: str,
    description: Optional[str],
    status: str,
    due_date: Optional[datetime] = None,
) -> Task:
    """Insert a task bound to *owner_id*.  A missing due date stays NULL."""
    task = Task(
        title=title,
        description=description,
        due_date=due_date,
        status=status,
        user_id=owner_id,
    )
    session.add(task)
    try:
        await session.flush()
    except IntegrityError as exc:
        # Only the owner foreign key can fail here.
        raise NotFoundError("User not found") from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to create task for user %s", owner_id)
        raise StorageError() from exc
    return task


async def list_tasks(session: AsyncSession, owner_id: int) -> List[Task]:
    try:
        result = await session.execute(
            select(Task).where(Task.user_id == owner_id).order_by(Task.id.asc())
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to list tasks for user %s", owner_id)
        raise StorageError() from exc
    return list(result.scalars().all())


async def get_task(session: AsyncSession, owner_id: int, task_id: int) -> Task:
    """Return the task matching both keys, else raise ``NotFoundError``."""
    try:
        result = await session.execute(
            select(Task).where(Task.id == task_id, Task.user_id == owner_id)
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to get task %s for user %s", task_id, owner_id)
        raise StorageError() from exc
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFoundError("Task not found")
    return task


async def update_task(
    session: AsyncSession,
    owner_id: int,
    task_id: int,
    *,
    title: str,
    description: Optional[str],
    status: str,
    due_date: Optional[datetime] = None,
) -> Task:
    """
    Replace title, description, due date and status of one task.

    The owner is part of the filter and is never written.
    """
    stmt = (
        update(Task)
        .where(Task.id == task_id, Task.user_id == owner_id)
        .values(
            title=title,
            description=description,
            due_date=due_date,
            status=status,
        )
        .returning(Task)
        .execution_options(synchronize_session="fetch", populate_existing=True)
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as exc:
        logger.exception("Failed to update task %s for user %s", task_id, owner_id)
        raise StorageError() from exc
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFoundError("Task not found")
    return task


async def delete_task(session: AsyncSession, owner_id: int, task_id: int) -> int:
    """Delete one task and return the number of rows removed (0 or 1)."""
    try:
        result = await session.execute(
            delete(Task)
            .where(Task.id == task_id, Task.user_id == owner_id)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete task %s for user %s", task_id, owner_id)
        raise StorageError() from exc
    return result.rowcount
