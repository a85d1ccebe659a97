"""Application service (use case) for CustomField definition operations."""

import logging

from custom_fields.application.interfaces import CustomFieldRepository
from custom_fields.application.schemas.custom_field import CustomFieldCreate, CustomFieldUpdate
from custom_fields.application.services.dependency_resolver import DependencyResolver
from custom_fields.application.services.visibility_logic_service import VisibilityLogicService
from custom_fields.domain.entities import CustomField, FieldOption
from custom_fields.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)


class CustomFieldService:
    """Orchestrates field definition CRUD. Depends on the repository port (DI).

    Visibility configuration is stored as given: rule correctness (e.g. a
    condition on a field that does not exist) is not validated here.
    """

    def __init__(
        self,
        repository: CustomFieldRepository,
        resolver: DependencyResolver | None = None,
    ):
        self._repository = repository
        self._resolver = resolver or DependencyResolver()
        self._logic = VisibilityLogicService(self._resolver)

    async def get_field(self, field_id: str) -> CustomField:
        custom_field = await self._repository.get_by_id(field_id)
        if custom_field is None:
            raise EntityNotFoundError("CustomField", field_id)
        return custom_field

    async def list_fields(
        self,
        *,
        entity_type: str | None = None,
        active_only: bool = False,
    ) -> list[CustomField]:
        return await self._repository.get_all(entity_type=entity_type, active_only=active_only)

    async def create_field(self, data: CustomFieldCreate) -> CustomField:
        existing = await self._repository.get_by_code(data.entity_type, data.code)
        if existing is not None:
            raise DuplicateEntityError("CustomField", "code", data.code)

        custom_field = data.to_entity()
        if custom_field.code in custom_field.visibility.dependencies():
            logger.warning(
                "Field '%s' on '%s' is configured to depend on itself",
                custom_field.code,
                custom_field.entity_type,
            )
        return await self._repository.create(custom_field)

    async def update_field(self, field_id: str, data: CustomFieldUpdate) -> CustomField:
        custom_field = await self.get_field(field_id)

        custom_field.update(
            name=data.name,
            field_type=data.field_type,
            options=(
                [FieldOption(**o.model_dump()) for o in data.options]
                if data.options is not None
                else None
            ),
            visibility=data.visibility.to_policy() if data.visibility is not None else None,
            sort_order=data.sort_order,
            active=data.active,
        )
        return await self._repository.update(custom_field)

    async def delete_field(self, field_id: str) -> bool:
        exists = await self._repository.get_by_id(field_id)
        if exists is None:
            raise EntityNotFoundError("CustomField", field_id)
        return await self._repository.delete(field_id)

    async def get_dependencies(self, entity_type: str) -> dict[str, set[str]]:
        """Reactive dependency map of the active fields of an entity type."""
        fields = await self._repository.get_all(entity_type=entity_type, active_only=True)
        return self._resolver.compute_reactive_fields(fields)

    async def get_field_metadata(self, entity_type: str) -> list[dict]:
        """Per-field wiring metadata (type traits, policy, dependencies, live flag)."""
        fields = await self._repository.get_all(entity_type=entity_type, active_only=True)
        return [self._logic.get_field_metadata(f, fields) for f in fields]
