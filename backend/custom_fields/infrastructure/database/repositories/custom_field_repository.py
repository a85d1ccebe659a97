"""Concrete repository implementation for CustomField backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from custom_fields.application.interfaces import CustomFieldRepository
from custom_fields.domain.entities import CustomField, FieldOption, FieldType, VisibilityPolicy
from custom_fields.infrastructure.database.models import CustomFieldModel


class SQLAlchemyCustomFieldRepository(CustomFieldRepository):
    """Implements the CustomFieldRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CustomFieldModel) -> CustomField:
        """Map ORM model → domain entity. Stored visibility is parsed leniently."""
        return CustomField(
            id=model.id,
            entity_type=model.entity_type,
            code=model.code,
            name=model.name,
            field_type=FieldType.from_value(model.field_type),
            options=[
                FieldOption(
                    id=str(o.get("id")),
                    name=str(o.get("name", "")),
                    sort_order=int(o.get("sort_order", 0)),
                )
                for o in (model.options or [])
                if isinstance(o, dict)
            ],
            visibility=VisibilityPolicy.from_config(model.visibility),
            sort_order=model.sort_order,
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _options_to_json(custom_field: CustomField) -> list[dict]:
        return [
            {"id": o.id, "name": o.name, "sort_order": o.sort_order}
            for o in custom_field.options
        ]

    def _to_model(self, entity: CustomField) -> CustomFieldModel:
        """Map domain entity → ORM model (for creation)."""
        return CustomFieldModel(
            id=entity.id,
            entity_type=entity.entity_type,
            code=entity.code,
            name=entity.name,
            field_type=entity.field_type.value,
            options=self._options_to_json(entity),
            visibility=entity.visibility.to_config(),
            sort_order=entity.sort_order,
            active=entity.active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, field_id: str) -> CustomField | None:
        result = await self._session.get(CustomFieldModel, field_id)
        return self._to_entity(result) if result else None

    async def get_by_code(self, entity_type: str, code: str) -> CustomField | None:
        stmt = select(CustomFieldModel).where(
            CustomFieldModel.entity_type == entity_type,
            CustomFieldModel.code == code,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(
        self,
        *,
        entity_type: str | None = None,
        active_only: bool = False,
    ) -> list[CustomField]:
        stmt = select(CustomFieldModel)

        if entity_type is not None:
            stmt = stmt.where(CustomFieldModel.entity_type == entity_type)
        if active_only:
            stmt = stmt.where(CustomFieldModel.active.is_(True))

        stmt = stmt.order_by(
            CustomFieldModel.entity_type,
            CustomFieldModel.sort_order,
            CustomFieldModel.code,
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, custom_field: CustomField) -> CustomField:
        model = self._to_model(custom_field)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, custom_field: CustomField) -> CustomField:
        model = await self._session.get(CustomFieldModel, custom_field.id)
        if model is None:
            raise ValueError(f"CustomField {custom_field.id} not found in database")
        model.name = custom_field.name
        model.field_type = custom_field.field_type.value
        model.options = self._options_to_json(custom_field)
        model.visibility = custom_field.visibility.to_config()
        model.sort_order = custom_field.sort_order
        model.active = custom_field.active
        model.updated_at = custom_field.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, field_id: str) -> bool:
        model = await self._session.get(CustomFieldModel, field_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
