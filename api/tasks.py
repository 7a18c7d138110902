"""
Task routes, all scoped under ``/users/{user_id}/tasks``.

The owner id every handler uses comes from ``authorize_owner``, never
straight from the path.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import TaskInput, TaskOut, TaskUpdate
from auth.dependencies import authorize_owner
from core.errors import NotFoundError
from database import tasks as task_store
from database.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/tasks", tags=["tasks"])


@router.post("", response_model=TaskOut)
async def create_task(
    req: TaskInput,
    owner_id: int = Depends(authorize_owner),
    session: AsyncSession = Depends(get_db_session),
) -> TaskOut:
    logger.info("Received request to create task for user with id %s", owner_id)
    task = await task_store.create_task(
        session,
        owner_id,
        title=req.title,
        description=req.description,
        status=req.status,
        due_date=req.due_date,
    )
    logger.info("Successfully created task with id %s", task.id)
    return TaskOut.model_validate(task)


@router.get("", response_model=List[TaskOut])
async def get_user_tasks(
    owner_id: int = Depends(authorize_owner),
    session: AsyncSession = Depends(get_db_session),
) -> List[TaskOut]:
    logger.info("Received request to get tasks for user with id %s", owner_id)
    tasks = await task_store.list_tasks(session, owner_id)
    logger.info("Successfully fetched %d tasks for user with id %s", len(tasks), owner_id)
    return [TaskOut.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskOut)
async def get_user_task(
    task_id: int = Path(..., ge=1),
    owner_id: int = Depends(authorize_owner),
    session: AsyncSession = Depends(get_db_session),
) -> TaskOut:
    task = await task_store.get_task(session, owner_id, task_id)
    return TaskOut.model_validate(task)


@router.put("/{task_id}", response_model=TaskOut)
async def update_user_task(
    req: TaskUpdate,
    task_id: int = Path(..., ge=1),
    owner_id: int = Depends(authorize_owner),
    session: AsyncSession = Depends(get_db_session),
) -> TaskOut:
    logger.info(
        "Received request to update task with id %s for user with id %s",
        task_id,
        owner_id,
    )
    task = await task_store.update_task(
        session,
        owner_id,
        task_id,
        title=req.title,
        description=req.description,
        status=req.status,
        due_date=req.due_date,
    )
    logger.info(
        "Successfully updated task with id %s for user with id %s", task.id, task.user_id
    )
    return TaskOut.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_task(
    task_id: int = Path(..., ge=1),
    owner_id: int = Depends(authorize_owner),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    logger.info(
        "Received request to delete task with id %s for user with id %s",
        task_id,
        owner_id,
    )
    deleted = await task_store.delete_task(session, owner_id, task_id)
    if deleted == 0:
        raise NotFoundError("No task found to delete")
    logger.info(
        "Successfully deleted task with id %s for user with id %s", task_id, owner_id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
