"""Field definition compiler — parses YAML field definitions and upserts them.

Executed once at application startup via the FastAPI lifespan. Each
``*.yaml`` file in the definitions directory describes the fields of one
entity type::

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
          conditions:
            - {field_code: country, operator: equals, value: US}
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from custom_fields.application.interfaces import CustomFieldRepository
from custom_fields.domain.entities import CustomField, FieldOption, FieldType, VisibilityPolicy

logger = logging.getLogger(__name__)


class FieldDefinitionCompiler:
    """Compiles YAML field definitions into the field repository."""

    def __init__(self, definitions_dir: str, repository: CustomFieldRepository):
        self._dir = Path(definitions_dir)
        self._repo = repository

    async def compile(self) -> int:
        """Parse every definitions file and upsert its fields.

        Existing fields (same entity type and code) are updated in place and
        keep their id; fields not mentioned in any file are left alone.
        Returns the number of fields compiled.
        """
        if not self._dir.exists():
            logger.info("No field definitions directory at %s — skipping", self._dir)
            return 0

        total = 0
        for yaml_file in sorted(self._dir.glob("*.yaml")):
            count = await self._compile_file(yaml_file)
            logger.info("Compiled %d field definitions from %s", count, yaml_file.name)
            total += count

        logger.info("Field definition compilation complete: %d fields", total)
        return total

    async def _compile_file(self, path: Path) -> int:
        data = self._load_yaml(path)
        if not isinstance(data, dict):
            return 0

        entity_type = data.get("entity_type")
        if not isinstance(entity_type, str) or not entity_type:
            logger.warning("Skipping %s: missing entity_type", path.name)
            return 0

        count = 0
        for position, entry in enumerate(data.get("fields") or []):
            if not isinstance(entry, dict) or not entry.get("code"):
                logger.warning("Skipping malformed field entry in %s: %r", path.name, entry)
                continue
            await self._upsert(self._build_field(entry, entity_type, position))
            count += 1
        return count

    async def _upsert(self, compiled: CustomField) -> None:
        existing = await self._repo.get_by_code(compiled.entity_type, compiled.code)
        if existing is None:
            await self._repo.create(compiled)
            return

        existing.update(
            name=compiled.name,
            field_type=compiled.field_type,
            options=compiled.options,
            visibility=compiled.visibility,
            sort_order=compiled.sort_order,
            active=compiled.active,
        )
        await self._repo.update(existing)

    @staticmethod
    def _build_field(entry: dict[str, Any], entity_type: str, position: int) -> CustomField:
        code = str(entry["code"])
        return CustomField(
            entity_type=entity_type,
            code=code,
            name=str(entry.get("name", code)),
            field_type=FieldType.from_value(entry.get("type", FieldType.TEXT.value)),
            options=[
                FieldOption(
                    id=str(opt.get("id", index + 1)),
                    name=str(opt.get("name", "")),
                    sort_order=int(opt.get("sort_order", index)),
                )
                for index, opt in enumerate(entry.get("options") or [])
                if isinstance(opt, dict)
            ],
            visibility=VisibilityPolicy.from_config(entry.get("visibility")),
            sort_order=int(entry.get("sort_order", position)),
            active=bool(entry.get("active", True)),
        )

    def _load_yaml(self, path: Path) -> dict | None:
        """Load and parse a YAML file, returning None on error."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except Exception:
            logger.exception("Failed to parse YAML file: %s", path)
            return None
