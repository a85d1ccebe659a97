"""Unit tests for the CustomFieldService."""

import pytest

from custom_fields.application.schemas import CustomFieldCreate, CustomFieldUpdate, VisibilitySchema
from custom_fields.application.services import CustomFieldService
from custom_fields.domain.entities import Mode
from custom_fields.domain.exceptions import DuplicateEntityError, EntityNotFoundError


@pytest.fixture
def service(field_repository) -> CustomFieldService:
    return CustomFieldService(field_repository)


def _state_field(**overrides) -> CustomFieldCreate:
    data = {
        "entity_type": "contact",
        "code": "state",
        "name": "State",
        "visibility": {
            "mode": "if",
            "conditions": [{"field_code": "country", "operator": "equals", "value": "US"}],
        },
    }
    data.update(overrides)
    return CustomFieldCreate.model_validate(data)


@pytest.mark.asyncio
async def test_create_field(service: CustomFieldService):
    created = await service.create_field(_state_field())
    assert created.id is not None
    assert created.visibility.mode is Mode.SHOW_IF
    assert created.visibility.dependencies() == frozenset({"country"})


@pytest.mark.asyncio
async def test_create_duplicate_code_raises(service: CustomFieldService):
    await service.create_field(_state_field())
    with pytest.raises(DuplicateEntityError):
        await service.create_field(_state_field(name="Other"))

    # Same code on another entity type is allowed
    other = await service.create_field(_state_field(entity_type="company"))
    assert other.entity_type == "company"


@pytest.mark.asyncio
async def test_unknown_mode_is_stored_as_always_visible(service: CustomFieldService):
    created = await service.create_field(
        _state_field(visibility={"mode": "whenever", "logic": "maybe"})
    )
    assert created.visibility.mode is Mode.ALWAYS_VISIBLE
    assert created.visibility.evaluate({}) is True


@pytest.mark.asyncio
async def test_get_field_not_found(service: CustomFieldService):
    with pytest.raises(EntityNotFoundError):
        await service.get_field("missing")


@pytest.mark.asyncio
async def test_update_field(service: CustomFieldService):
    created = await service.create_field(_state_field())
    updated = await service.update_field(
        created.id,
        CustomFieldUpdate(name="Region", visibility=VisibilitySchema(mode="always")),
    )
    assert updated.name == "Region"
    assert updated.visibility.mode is Mode.ALWAYS_VISIBLE
    assert updated.code == "state"


@pytest.mark.asyncio
async def test_delete_field(service: CustomFieldService):
    created = await service.create_field(_state_field())
    assert await service.delete_field(created.id) is True
    with pytest.raises(EntityNotFoundError):
        await service.delete_field(created.id)


@pytest.mark.asyncio
async def test_dependencies_only_consider_active_fields(service: CustomFieldService):
    await service.create_field(
        CustomFieldCreate(entity_type="contact", code="country", name="Country")
    )
    await service.create_field(_state_field())
    await service.create_field(
        _state_field(code="zip", name="Zip", active=False)
    )

    assert await service.get_dependencies("contact") == {"country": {"state"}}
    assert [f.code for f in await service.list_fields(entity_type="contact")] == [
        "country",
        "state",
        "zip",
    ]


@pytest.mark.asyncio
async def test_field_metadata_for_entity_type(service: CustomFieldService):
    await service.create_field(
        CustomFieldCreate(entity_type="contact", code="country", name="Country")
    )
    await service.create_field(_state_field())

    metadata = {m["code"]: m for m in await service.get_field_metadata("contact")}

    assert metadata["country"]["live"] is True
    assert metadata["country"]["has_visibility_conditions"] is False
    assert metadata["state"]["dependent_fields"] == ["country"]
    assert metadata["state"]["visibility_conditions"] == [
        {"field_code": "country", "operator": "equals", "value": "US"}
    ]
