"""Shared in-memory fakes of the repository ports."""

import pytest

from custom_fields.application.interfaces import CustomFieldRepository, EntityRecordRepository
from custom_fields.domain.entities import CustomField, EntityRecord


class FakeCustomFieldRepository(CustomFieldRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._fields: dict[str, CustomField] = {}

    async def get_by_id(self, field_id: str) -> CustomField | None:
        return self._fields.get(field_id)

    async def get_by_code(self, entity_type: str, code: str) -> CustomField | None:
        for f in self._fields.values():
            if f.entity_type == entity_type and f.code == code:
                return f
        return None

    async def get_all(
        self, *, entity_type: str | None = None, active_only: bool = False
    ) -> list[CustomField]:
        fields = [
            f
            for f in self._fields.values()
            if (entity_type is None or f.entity_type == entity_type)
            and (not active_only or f.active)
        ]
        return sorted(fields, key=lambda f: (f.entity_type, f.sort_order, f.code))

    async def create(self, custom_field: CustomField) -> CustomField:
        self._fields[custom_field.id] = custom_field
        return custom_field

    async def update(self, custom_field: CustomField) -> CustomField:
        if custom_field.id not in self._fields:
            raise ValueError(f"CustomField {custom_field.id} not found")
        self._fields[custom_field.id] = custom_field
        return custom_field

    async def delete(self, field_id: str) -> bool:
        return self._fields.pop(field_id, None) is not None


class FakeEntityRecordRepository(EntityRecordRepository):
    """In-memory fake keyed by (entity_type, record_id)."""

    def __init__(self):
        self.records: dict[tuple[str, str], EntityRecord] = {}
        self.saves = 0

    async def get(self, entity_type: str, record_id: str) -> EntityRecord | None:
        return self.records.get((entity_type, record_id))

    async def save(self, record: EntityRecord) -> EntityRecord:
        self.saves += 1
        self.records[(record.entity_type, record.record_id)] = record
        return record


@pytest.fixture
def field_repository() -> FakeCustomFieldRepository:
    return FakeCustomFieldRepository()


@pytest.fixture
def record_repository() -> FakeEntityRecordRepository:
    return FakeEntityRecordRepository()
