"""Backend (eager) visibility — filters a field collection against a materialised record.

Used for read-only views and exports: the record's values are resolved
once into a snapshot, and every field of the pass is evaluated against
that same snapshot.
"""

import logging
from collections.abc import Iterable
from typing import Any

from custom_fields.application.services.dependency_resolver import DependencyResolver
from custom_fields.application.services.visibility_logic_service import VisibilityLogicService
from custom_fields.domain.entities import CustomField
from custom_fields.domain.value_source import as_value_source

logger = logging.getLogger(__name__)


class BackendVisibilityService:
    """Server-side visibility evaluation over a record snapshot.

    ``record`` may be an ``EntityRecord``, a plain mapping of code → value,
    or anything else with ``get(code)``; ``None`` means "no stored values".
    Each field is judged by its own policy; with ``cascade`` it is also
    hidden when a field it depends on is hidden.
    """

    def __init__(
        self,
        logic: VisibilityLogicService | None = None,
        resolver: DependencyResolver | None = None,
        *,
        enabled: bool = True,
        cascade: bool = False,
    ):
        self._resolver = resolver or DependencyResolver()
        self._logic = logic or VisibilityLogicService(self._resolver)
        self._enabled = enabled
        self._cascade = cascade

    def extract_field_values(self, record: Any, fields: Iterable[CustomField]) -> dict[str, Any]:
        """Resolve every field's current value from the record, once, normalised."""
        source = as_value_source(record)
        return {
            f.code: self._logic.normalize_value(f, source.get(f.code))
            for f in fields
        }

    def get_visible_fields(self, record: Any, fields: Iterable[CustomField]) -> list[CustomField]:
        """The visible subset of ``fields``, in input order."""
        fields = list(fields)
        if not self._enabled:
            return fields

        snapshot = self.extract_field_values(record, fields)
        return [f for f in fields if self._is_visible(f, snapshot, fields)]

    def is_field_visible(
        self, record: Any, custom_field: CustomField, all_fields: Iterable[CustomField]
    ) -> bool:
        if not self._enabled:
            return True
        all_fields = list(all_fields)
        snapshot = self.extract_field_values(record, all_fields)
        return self._is_visible(custom_field, snapshot, all_fields)

    def get_hidden_field_codes(self, record: Any, fields: Iterable[CustomField]) -> list[str]:
        fields = list(fields)
        visible = {f.code for f in self.get_visible_fields(record, fields)}
        return [f.code for f in fields if f.code not in visible]

    def filter_visible_fields(
        self, fields: Iterable[CustomField], field_values: dict[str, Any]
    ) -> list[CustomField]:
        """Filter against already-extracted values, without cascading."""
        fields = list(fields)
        if not self._enabled:
            return fields
        return self._logic.filter_visible_fields(fields, field_values)

    def get_always_save_fields(self, fields: Iterable[CustomField]) -> list[CustomField]:
        return self._logic.get_always_save_fields(fields)

    def calculate_dependencies(self, fields: Iterable[CustomField]) -> dict[str, set[str]]:
        return self._resolver.compute_reactive_fields(fields)

    def validate_visibility_consistency(
        self, record: Any, fields: Iterable[CustomField]
    ) -> dict[str, Any]:
        """Diagnostic summary of one evaluation pass."""
        fields = list(fields)
        snapshot = self.extract_field_values(record, fields)
        visible = (
            [f for f in fields if self._is_visible(f, snapshot, fields)]
            if self._enabled
            else fields
        )

        report = {
            "total_fields": len(fields),
            "visible_fields": len(visible),
            "hidden_fields": len(fields) - len(visible),
            "field_values_extracted": len(snapshot),
            "has_visibility_conditions": sum(
                1 for f in fields if self._logic.has_visibility_conditions(f)
            ),
            "visible_field_codes": [f.code for f in visible],
            "dependencies": {
                code: sorted(dependents)
                for code, dependents in self.calculate_dependencies(fields).items()
            },
        }
        logger.debug(
            "Visibility pass: %d/%d fields visible", report["visible_fields"], report["total_fields"]
        )
        return report

    def _is_visible(
        self, custom_field: CustomField, snapshot: dict[str, Any], fields: list[CustomField]
    ) -> bool:
        if self._cascade:
            return self._logic.evaluate_visibility_with_cascading(custom_field, snapshot, fields)
        return self._logic.evaluate_visibility(custom_field, snapshot)
