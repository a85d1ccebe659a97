"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from custom_fields.config import get_settings
from custom_fields.infrastructure.database import Base, engine
from custom_fields.infrastructure.database.session import async_session_factory
from custom_fields.infrastructure.database.repositories import SQLAlchemyCustomFieldRepository
from custom_fields.application.services import FieldDefinitionCompiler
from custom_fields.infrastructure.logging.log_config import setup_logging
from custom_fields.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]


def _resolve_definitions_dir(raw: str) -> Path:
    """Relative definition directories are resolved against the backend directory."""
    path = Path(raw)
    return path if path.is_absolute() else _BACKEND_DIR / path


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables and compile YAML field definitions."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Compile field definitions YAML → DB
    try:
        async with async_session_factory() as session:
            repository = SQLAlchemyCustomFieldRepository(session)
            compiler = FieldDefinitionCompiler(
                definitions_dir=str(_resolve_definitions_dir(settings.field_definitions_dir)),
                repository=repository,
            )
            total = await compiler.compile()
            await session.commit()
            logger.info("Field definitions compiled: %d fields loaded", total)
    except Exception:
        logger.exception("Failed to compile field definitions — continuing without them")

    if not settings.conditional_visibility_enabled:
        logger.warning("Conditional visibility is disabled; every field will be shown")

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "custom_fields.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
