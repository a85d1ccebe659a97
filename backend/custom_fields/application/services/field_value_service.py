"""Save pipeline for custom field values, honouring visibility and ``always_save``.

A submitted value is written only when its field is visible for the
submitted state, or when the field's policy asks for it to be saved
regardless. Otherwise the stored value, if any, is left untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from custom_fields.application.interfaces import CustomFieldRepository, EntityRecordRepository
from custom_fields.application.services.backend_visibility_service import BackendVisibilityService
from custom_fields.domain.entities import EntityRecord
from custom_fields.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    """Outcome of one save: the stored record and which submitted codes were written or skipped."""

    record: EntityRecord
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class FieldValueService:
    """Reads and writes record values through the visibility engine."""

    def __init__(
        self,
        field_repository: CustomFieldRepository,
        record_repository: EntityRecordRepository,
        visibility: BackendVisibilityService | None = None,
    ):
        self._fields = field_repository
        self._records = record_repository
        self._visibility = visibility or BackendVisibilityService()

    async def save_values(
        self, entity_type: str, record_id: str, submitted: dict[str, Any]
    ) -> SaveResult:
        fields = await self._fields.get_all(entity_type=entity_type, active_only=True)
        by_code = {f.code: f for f in fields}

        record = await self._records.get(entity_type, record_id)
        if record is None:
            record = EntityRecord(entity_type=entity_type, record_id=record_id)

        unknown = [code for code in submitted if code not in by_code]
        if unknown:
            logger.debug("Ignoring values for undefined fields on '%s': %s", entity_type, unknown)
        known = {code: value for code, value in submitted.items() if code in by_code}

        # Visibility is decided on the state the user submitted, not the stored one
        snapshot = {**record.values, **known}
        visible_codes = {f.code for f in self._visibility.get_visible_fields(snapshot, fields)}

        to_write: dict[str, Any] = {}
        skipped: list[str] = []
        for code, value in known.items():
            if code in visible_codes or by_code[code].visibility.always_save:
                to_write[code] = value
            else:
                skipped.append(code)

        record.set_values(to_write)
        saved = await self._records.save(record)

        logger.info(
            "Saved %d value(s) for %s/%s, skipped %d hidden",
            len(to_write), entity_type, record_id, len(skipped),
        )
        return SaveResult(record=saved, written=list(to_write), skipped=skipped)

    async def get_visible_values(
        self, entity_type: str, record_id: str
    ) -> tuple[dict[str, Any], list[str]]:
        """Stored values of the fields visible for the record, plus the hidden codes."""
        record = await self._records.get(entity_type, record_id)
        if record is None:
            raise EntityNotFoundError("EntityRecord", record_id)

        fields = await self._fields.get_all(entity_type=entity_type, active_only=True)
        visible = self._visibility.get_visible_fields(record, fields)
        visible_codes = {f.code for f in visible}

        values = {f.code: record.get(f.code) for f in visible}
        hidden = [f.code for f in fields if f.code not in visible_codes]
        return values, hidden
