"""
Map the typed error taxonomy onto HTTP responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.errors import StorageError, TaskTrackerError, ValidationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach one handler for the whole ``TaskTrackerError`` family."""

    @app.exception_handler(TaskTrackerError)
    async def task_tracker_error(request: Request, exc: TaskTrackerError):
        if isinstance(exc, StorageError):
            logger.error("%s %s failed with a storage error", request.method, request.url.path)
        else:
            logger.info(
                "%s %s → %d %s",
                request.method,
                request.url.path,
                exc.status_code,
                type(exc).__name__,
            )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        detail = exc.errors() if isinstance(exc, ValidationError) else exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": detail},
            headers=headers,
        )
