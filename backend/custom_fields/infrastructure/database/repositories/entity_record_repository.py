"""Concrete repository implementation for EntityRecord backed by SQLAlchemy."""

from sqlalchemy.ext.asyncio import AsyncSession

from custom_fields.application.interfaces import EntityRecordRepository
from custom_fields.domain.entities import EntityRecord
from custom_fields.infrastructure.database.models import EntityRecordModel


class SQLAlchemyEntityRecordRepository(EntityRecordRepository):
    """Implements the EntityRecordRepository port; one row per (entity_type, record_id)."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: EntityRecordModel) -> EntityRecord:
        return EntityRecord(
            entity_type=model.entity_type,
            record_id=model.record_id,
            values=dict(model.values or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get(self, entity_type: str, record_id: str) -> EntityRecord | None:
        model = await self._session.get(EntityRecordModel, (entity_type, record_id))
        return self._to_entity(model) if model else None

    async def save(self, record: EntityRecord) -> EntityRecord:
        model = await self._session.get(EntityRecordModel, (record.entity_type, record.record_id))
        if model is None:
            model = EntityRecordModel(
                entity_type=record.entity_type,
                record_id=record.record_id,
                values=dict(record.values),
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            self._session.add(model)
        else:
            # Reassign so the JSON column is flagged dirty
            model.values = dict(record.values)
            model.updated_at = record.updated_at
        await self._session.flush()
        return self._to_entity(model)
