"""Unit tests for the save pipeline and visible-value reads."""

import pytest

from custom_fields.application.services import BackendVisibilityService, FieldValueService
from custom_fields.domain.entities import CustomField, EntityRecord, FieldOption, FieldType, VisibilityPolicy
from custom_fields.domain.exceptions import EntityNotFoundError


async def _seed(field_repository) -> None:
    fields = [
        CustomField(
            entity_type="contact",
            code="country",
            name="Country",
            field_type=FieldType.SELECT,
            options=[FieldOption(id="1", name="US"), FieldOption(id="2", name="CA")],
        ),
        CustomField(
            entity_type="contact",
            code="state",
            name="State",
            sort_order=1,
            visibility=VisibilityPolicy.from_config(
                {"mode": "if", "conditions": [{"field_code": "country", "operator": "equals", "value": "US"}]}
            ),
        ),
        CustomField(
            entity_type="contact",
            code="tax_id",
            name="Tax ID",
            sort_order=2,
            visibility=VisibilityPolicy.from_config(
                {
                    "mode": "if",
                    "always_save": True,
                    "conditions": [{"field_code": "country", "operator": "equals", "value": "CA"}],
                }
            ),
        ),
    ]
    for f in fields:
        await field_repository.create(f)


@pytest.fixture
def service(field_repository, record_repository) -> FieldValueService:
    return FieldValueService(field_repository, record_repository)


@pytest.mark.asyncio
async def test_visible_values_are_written(service, field_repository, record_repository):
    await _seed(field_repository)
    result = await service.save_values("contact", "r1", {"country": "1", "state": "TX"})

    assert result.written == ["country", "state"]
    assert result.skipped == []
    assert record_repository.records[("contact", "r1")].values == {"country": "1", "state": "TX"}


@pytest.mark.asyncio
async def test_hidden_values_are_skipped_and_stored_values_kept(
    service, field_repository, record_repository
):
    await _seed(field_repository)
    await service.save_values("contact", "r1", {"country": "1", "state": "TX"})

    result = await service.save_values("contact", "r1", {"country": "2", "state": "ON"})

    assert result.written == ["country"]
    assert result.skipped == ["state"]
    # The previously stored state is left untouched
    assert result.record.values == {"country": "2", "state": "TX"}


@pytest.mark.asyncio
async def test_always_save_values_are_written_while_hidden(service, field_repository):
    await _seed(field_repository)
    result = await service.save_values("contact", "r1", {"country": "1", "tax_id": "123"})

    assert "tax_id" in result.written
    assert result.record.values["tax_id"] == "123"


@pytest.mark.asyncio
async def test_unknown_codes_are_ignored(service, field_repository):
    await _seed(field_repository)
    result = await service.save_values("contact", "r1", {"nickname": "Bob", "country": "1"})

    assert result.written == ["country"]
    assert "nickname" not in result.record.values


@pytest.mark.asyncio
async def test_disabled_visibility_writes_everything(field_repository, record_repository):
    await _seed(field_repository)
    service = FieldValueService(
        field_repository, record_repository, BackendVisibilityService(enabled=False)
    )
    result = await service.save_values("contact", "r1", {"country": "2", "state": "ON"})

    assert result.skipped == []
    assert result.record.values == {"country": "2", "state": "ON"}


@pytest.mark.asyncio
async def test_get_visible_values(service, field_repository, record_repository):
    await _seed(field_repository)
    await record_repository.save(
        EntityRecord(
            entity_type="contact",
            record_id="r1",
            values={"country": "2", "state": "TX", "tax_id": "9"},
        )
    )

    values, hidden = await service.get_visible_values("contact", "r1")

    assert values == {"country": "2", "tax_id": "9"}
    assert hidden == ["state"]


@pytest.mark.asyncio
async def test_get_visible_values_missing_record(service, field_repository):
    await _seed(field_repository)
    with pytest.raises(EntityNotFoundError):
        await service.get_visible_values("contact", "nope")


@pytest.mark.asyncio
async def test_dependent_of_hidden_field_is_written_when_its_own_rule_passes(
    service, field_repository
):
    await _seed(field_repository)
    await field_repository.create(
        CustomField(
            entity_type="contact",
            code="county",
            name="County",
            sort_order=3,
            visibility=VisibilityPolicy.from_config(
                {"mode": "if", "conditions": [{"field_code": "state", "operator": "is_not_empty"}]}
            ),
        )
    )

    result = await service.save_values(
        "contact", "r1", {"country": "2", "state": "ON", "county": "York"}
    )

    assert result.skipped == ["state"]
    assert "county" in result.written
