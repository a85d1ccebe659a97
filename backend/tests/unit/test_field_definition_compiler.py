"""Unit tests for the YAML FieldDefinitionCompiler."""

from pathlib import Path

import pytest

from custom_fields.application.services import FieldDefinitionCompiler
from custom_fields.domain.entities import FieldType, Mode

_CONTACT_YAML = """\
entity_type: contact
fields:
  - code: country
    name: Country
    type: select
    options:
      - {id: "1", name: US}
      - {id: "2", name: CA}
  - code: state
    name: State
    visibility:
      mode: if
      always_save: true
      conditions:
        - {field_code: country, operator: equals, value: US}
        - {field_code: country, operator: teleport}
  - name: Missing code
"""


@pytest.mark.asyncio
async def test_compile_creates_fields(tmp_path: Path, field_repository):
    (tmp_path / "contact.yaml").write_text(_CONTACT_YAML, encoding="utf-8")

    total = await FieldDefinitionCompiler(str(tmp_path), field_repository).compile()

    assert total == 2
    country = await field_repository.get_by_code("contact", "country")
    state = await field_repository.get_by_code("contact", "state")
    assert country.field_type is FieldType.SELECT
    assert [o.name for o in country.options] == ["US", "CA"]
    assert state.sort_order == 1
    assert state.visibility.mode is Mode.SHOW_IF
    assert state.visibility.always_save is True
    assert len(state.visibility.conditions) == 1


@pytest.mark.asyncio
async def test_compile_updates_existing_fields_by_code(tmp_path: Path, field_repository):
    path = tmp_path / "contact.yaml"
    path.write_text(_CONTACT_YAML, encoding="utf-8")
    compiler = FieldDefinitionCompiler(str(tmp_path), field_repository)
    await compiler.compile()
    original = await field_repository.get_by_code("contact", "state")

    path.write_text(
        "entity_type: contact\nfields:\n  - {code: state, name: Region}\n", encoding="utf-8"
    )
    await compiler.compile()

    updated = await field_repository.get_by_code("contact", "state")
    assert updated.id == original.id
    assert updated.name == "Region"
    assert updated.visibility.mode is Mode.ALWAYS_VISIBLE
    assert len(await field_repository.get_all(entity_type="contact")) == 2


@pytest.mark.asyncio
async def test_compile_skips_invalid_files(tmp_path: Path, field_repository):
    (tmp_path / "broken.yaml").write_text("fields: [unclosed", encoding="utf-8")
    (tmp_path / "no_type.yaml").write_text("fields:\n  - {code: a}\n", encoding="utf-8")

    assert await FieldDefinitionCompiler(str(tmp_path), field_repository).compile() == 0


@pytest.mark.asyncio
async def test_missing_directory_compiles_nothing(tmp_path: Path, field_repository):
    compiler = FieldDefinitionCompiler(str(tmp_path / "absent"), field_repository)
    assert await compiler.compile() == 0
