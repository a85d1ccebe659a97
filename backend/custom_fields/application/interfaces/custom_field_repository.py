"""Abstract repository interface (port) for CustomField definitions."""

from abc import ABC, abstractmethod

from custom_fields.domain.entities import CustomField


class CustomFieldRepository(ABC):
    """Port for field definition persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, field_id: str) -> CustomField | None:
        """Retrieve a single field definition by its UUID."""
        ...

    @abstractmethod
    async def get_by_code(self, entity_type: str, code: str) -> CustomField | None:
        """Retrieve the field with ``code`` on ``entity_type``."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        entity_type: str | None = None,
        active_only: bool = False,
    ) -> list[CustomField]:
        """Retrieve field definitions ordered by sort_order, then name."""
        ...

    @abstractmethod
    async def create(self, custom_field: CustomField) -> CustomField:
        """Persist a new field definition and return it."""
        ...

    @abstractmethod
    async def update(self, custom_field: CustomField) -> CustomField:
        """Update an existing field definition."""
        ...

    @abstractmethod
    async def delete(self, field_id: str) -> bool:
        """Delete a field definition. Returns True if deleted, False if not found."""
        ...
