"""Core visibility logic — the one algorithm behind both evaluation contexts.

The backend (eager, record snapshot) and frontend (reactive, live form
state) services both delegate here, so a field is never shown on one side
and hidden on the other for the same values.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from custom_fields.application.services.dependency_resolver import DependencyResolver
from custom_fields.domain.entities import CustomField, VisibilityPolicy
from custom_fields.domain.value_source import ValueSource, as_value_source

logger = logging.getLogger(__name__)


class VisibilityLogicService:
    """Stateless visibility decisions over field definitions and a value source."""

    def __init__(self, resolver: DependencyResolver | None = None):
        self._resolver = resolver or DependencyResolver()

    # ── Policy accessors ────────────────────────────────────────────

    def get_policy(self, custom_field: CustomField) -> VisibilityPolicy:
        return custom_field.visibility or VisibilityPolicy.always()

    def has_visibility_conditions(self, custom_field: CustomField) -> bool:
        return self.get_policy(custom_field).requires_conditions()

    def get_dependencies(self, custom_field: CustomField) -> frozenset[str]:
        return self.get_policy(custom_field).dependencies()

    def should_always_save(self, custom_field: CustomField) -> bool:
        return self.get_policy(custom_field).always_save

    # ── Evaluation ──────────────────────────────────────────────────

    def evaluate_visibility(self, custom_field: CustomField, values: Any) -> bool:
        """Evaluate the field's own policy, one level deep."""
        return self.get_policy(custom_field).evaluate(values)

    def evaluate_visibility_with_cascading(
        self,
        custom_field: CustomField,
        values: Any,
        all_fields: Iterable[CustomField],
    ) -> bool:
        """Visible only if the field's policy passes and every field it depends on is visible.

        Dependencies are followed transitively. A dependency already on the
        current path (a cycle) is not followed again.
        """
        by_code = {f.code: f for f in all_fields}
        return self._cascade(custom_field, as_value_source(values), by_code, frozenset())

    def _cascade(
        self,
        custom_field: CustomField,
        source: ValueSource,
        by_code: Mapping[str, CustomField],
        path: frozenset[str],
    ) -> bool:
        if not self.evaluate_visibility(custom_field, source):
            return False
        if not self.has_visibility_conditions(custom_field):
            return True

        path = path | {custom_field.code}
        for dependency_code in sorted(self.get_dependencies(custom_field)):
            if dependency_code in path:
                logger.debug(
                    "Visibility cycle through '%s' — not followed", dependency_code
                )
                continue
            parent = by_code.get(dependency_code)
            if parent is None:
                continue
            if not self._cascade(parent, source, by_code, path):
                return False
        return True

    def filter_visible_fields(
        self, fields: Iterable[CustomField], values: Any
    ) -> list[CustomField]:
        """Fields whose own policy passes, in input order (no cascading)."""
        source = as_value_source(values)
        return [f for f in fields if self.evaluate_visibility(f, source)]

    def get_always_save_fields(self, fields: Iterable[CustomField]) -> list[CustomField]:
        return [f for f in fields if self.should_always_save(f)]

    # ── Value normalisation ─────────────────────────────────────────

    def normalize_value(self, custom_field: CustomField | None, value: Any) -> Any:
        """Convert stored option ids to option names so conditions compare by name."""
        if custom_field is None or value is None or value == "":
            return value
        if not custom_field.field_type.is_optionable() or not custom_field.options:
            return value

        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._option_name_or_value(custom_field, item) for item in value]
        return self._option_name_or_value(custom_field, value)

    @staticmethod
    def _option_name_or_value(custom_field: CustomField, value: Any) -> Any:
        name = custom_field.option_name(value)
        return value if name is None else name

    def normalized_source(self, values: Any, fields: Iterable[CustomField]) -> ValueSource:
        """Wrap a value source so every lookup is normalised for its field."""
        return _NormalizedValueSource(
            as_value_source(values), {f.code: f for f in fields}, self.normalize_value
        )

    # ── Metadata ────────────────────────────────────────────────────

    def calculate_dependencies(self, fields: Iterable[CustomField]) -> dict[str, set[str]]:
        return self._resolver.compute_reactive_fields(fields)

    def get_field_metadata(
        self,
        custom_field: CustomField,
        all_fields: Iterable[CustomField] | None = None,
    ) -> dict[str, Any]:
        """Everything a client-side schema builder needs to wire one field."""
        policy = self.get_policy(custom_field)
        field_type = custom_field.field_type
        live = False
        if all_fields is not None:
            live = self._resolver.is_live(custom_field, all_fields)

        return {
            "code": custom_field.code,
            "type": field_type.value,
            "is_optionable": field_type.is_optionable(),
            "has_multiple_values": field_type.has_multiple_values(),
            "compatible_operators": [op.value for op in field_type.compatible_operators()],
            "has_visibility_conditions": policy.requires_conditions(),
            "visibility_mode": policy.mode.value,
            "visibility_logic": policy.logic.value,
            "visibility_conditions": [c.to_config() for c in policy.conditions or ()],
            "dependent_fields": sorted(policy.dependencies()),
            "always_save": policy.always_save,
            "live": live,
        }


class _NormalizedValueSource:
    """Value source that normalises each looked-up value for its field."""

    def __init__(self, source: ValueSource, by_code: Mapping[str, CustomField], normalize):
        self._source = source
        self._by_code = by_code
        self._normalize = normalize

    def get(self, code: str) -> Any:
        return self._normalize(self._by_code.get(code), self._source.get(code))
