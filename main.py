"""
Task Tracker API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.tasks import router as tasks_router
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.service import AuthService
from config.settings import Settings, load_settings
from database.session import build_engine, build_session_factory, init_schema

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "aiosqlite"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="Task Tracker API",
        version="1.0.0",
        description="Per-user task tracking with bearer-token sign-in.",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.auth_service = AuthService(
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        issuer=TokenIssuer(settings.jwt_secret, settings.jwt_expiry_seconds),
    )

    register_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(tasks_router)

    @app.get("/", include_in_schema=False)
    async def index() -> str:
        return "Hello, world!"

    @app.on_event("startup")
    async def on_startup():
        await init_schema(engine)
        logger.info(
            "Application ready to accept requests (auth profile: %s).",
            settings.auth_profile,
        )

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    return app


if __name__ == "__main__":
    _settings = load_settings()
    configure_logging(_settings)
    uvicorn.run(
        create_app(_settings),
        host=_settings.host,
        port=_settings.port,
        log_level="debug" if _settings.debug else "info",
    )
