"""Dependency resolver — inverts visibility conditions into a "who depends on me" map.

The dependency graph is never stored: it is rebuilt from the fields'
policies on every call, in one pass over fields × conditions.
"""

import logging
from collections.abc import Iterable

from custom_fields.domain.entities import CustomField

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Computes which fields must be live (re-evaluate dependents when they change)."""

    def compute_reactive_fields(self, fields: Iterable[CustomField]) -> dict[str, set[str]]:
        """Map each source field code to the codes of the other fields whose policies read it.

        Dependencies on codes absent from ``fields`` are skipped, and a
        field referencing its own code is ignored rather than rejected.
        """
        fields = list(fields)
        known_codes = {f.code for f in fields}
        dependents: dict[str, set[str]] = {}

        for custom_field in fields:
            for source_code in custom_field.visibility.dependencies():
                if source_code == custom_field.code:
                    logger.warning(
                        "Field '%s' has a visibility condition on itself — ignored",
                        custom_field.code,
                    )
                    continue
                if source_code not in known_codes:
                    continue
                dependents.setdefault(source_code, set()).add(custom_field.code)

        return dependents

    def live_field_codes(self, fields: Iterable[CustomField]) -> set[str]:
        """Codes of fields at least one other field depends on."""
        return {
            code
            for code, dependent_codes in self.compute_reactive_fields(fields).items()
            if dependent_codes
        }

    def is_live(self, custom_field: CustomField, fields: Iterable[CustomField]) -> bool:
        return bool(self.compute_reactive_fields(fields).get(custom_field.code))
