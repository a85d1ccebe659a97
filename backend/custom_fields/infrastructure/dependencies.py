"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from custom_fields.config import get_settings
from custom_fields.application.services import (
    BackendVisibilityService,
    CustomFieldService,
    FieldValueService,
    FrontendVisibilityService,
)
from custom_fields.infrastructure.database.session import get_db_session
from custom_fields.infrastructure.database.repositories import (
    SQLAlchemyCustomFieldRepository,
    SQLAlchemyEntityRecordRepository,
)


async def get_custom_field_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CustomFieldService, None]:
    """Provides a CustomFieldService instance with its repository wired up."""
    repository = SQLAlchemyCustomFieldRepository(session)
    yield CustomFieldService(repository)


async def get_field_value_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[FieldValueService, None]:
    """Provides the save pipeline with visibility configured from settings."""
    settings = get_settings()
    visibility = BackendVisibilityService(
        enabled=settings.conditional_visibility_enabled,
        cascade=settings.cascade_visibility,
    )
    yield FieldValueService(
        field_repository=SQLAlchemyCustomFieldRepository(session),
        record_repository=SQLAlchemyEntityRecordRepository(session),
        visibility=visibility,
    )


def get_frontend_visibility_service() -> FrontendVisibilityService:
    """Provides the reactive visibility evaluator. Stateless, so no session is needed."""
    settings = get_settings()
    return FrontendVisibilityService(
        enabled=settings.conditional_visibility_enabled,
        cascade=settings.cascade_visibility,
    )
