"""Domain entity — the custom field values stored for one record of an entity type."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class EntityRecord:
    """Custom field values of a single record, keyed by field code.

    Records are scoped by entity_type; ``record_id`` is the identifier of
    the host record the values belong to.
    """

    entity_type: str
    record_id: str
    values: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get(self, code: str) -> Any:
        return self.values.get(code)

    def set_values(self, values: dict[str, Any]) -> None:
        """Write the given values over the stored ones and refresh updated_at."""
        if not values:
            return
        self.values = {**self.values, **values}
        self.updated_at = datetime.now(timezone.utc)
