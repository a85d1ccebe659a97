"""Abstract repository interface (port) for stored custom field values."""

from abc import ABC, abstractmethod

from custom_fields.domain.entities import EntityRecord


class EntityRecordRepository(ABC):
    """Port for per-record value persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get(self, entity_type: str, record_id: str) -> EntityRecord | None:
        """Retrieve the stored values of one record, or None if nothing is stored."""
        ...

    @abstractmethod
    async def save(self, record: EntityRecord) -> EntityRecord:
        """Insert or update the values of a record and return it."""
        ...
