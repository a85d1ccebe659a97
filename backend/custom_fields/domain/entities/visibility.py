"""Domain entities for conditional field visibility — modes, logic, conditions and policies.

A ``VisibilityPolicy`` decides whether a custom field is shown, given the
values of sibling fields on the same record. Policies are built from the
configuration stored with a field definition::

    {
        "mode": "always" | "if" | "unless",
        "logic": "all" | "any",
        "conditions": [{"field_code": "country", "operator": "equals", "value": "US"}],
        "always_save": false,
    }

Parsing is lenient: unknown modes and logics fall back to the defaults and
malformed conditions are dropped, so a configuration typo never raises.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from custom_fields.domain.entities.operator import Operator, coerce_bool
from custom_fields.domain.value_source import ValueSource, as_value_source

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """When a field is shown."""

    ALWAYS_VISIBLE = "always"
    SHOW_IF = "if"
    HIDE_UNLESS = "unless"

    @property
    def label(self) -> str:
        return {
            Mode.ALWAYS_VISIBLE: "Always visible",
            Mode.SHOW_IF: "Show when conditions are met",
            Mode.HIDE_UNLESS: "Hide unless conditions are met",
        }[self]

    @classmethod
    def from_value(cls, raw: Any) -> "Mode":
        """Parse a mode; unknown or missing values mean always visible."""
        if isinstance(raw, Mode):
            return raw
        if isinstance(raw, str):
            mode = _MODE_ALIASES.get(raw.strip().lower())
            if mode is not None:
                return mode
        if raw is not None:
            logger.debug("Unknown visibility mode %r — defaulting to always visible", raw)
        return cls.ALWAYS_VISIBLE

    def requires_conditions(self) -> bool:
        return self is not Mode.ALWAYS_VISIBLE

    def should_show(self, conditions_met: bool) -> bool:
        if self is Mode.SHOW_IF:
            return conditions_met
        if self is Mode.HIDE_UNLESS:
            return not conditions_met
        return True


class Logic(str, Enum):
    """How condition results are combined."""

    ALL = "all"
    ANY = "any"

    @property
    def label(self) -> str:
        if self is Logic.ALL:
            return "All conditions must be met (AND)"
        return "Any condition must be met (OR)"

    @classmethod
    def from_value(cls, raw: Any) -> "Logic":
        """Parse a logic; unknown or missing values mean ALL."""
        if isinstance(raw, Logic):
            return raw
        if isinstance(raw, str):
            logic = _LOGIC_ALIASES.get(raw.strip().lower())
            if logic is not None:
                return logic
        if raw is not None:
            logger.debug("Unknown visibility logic %r — defaulting to 'all'", raw)
        return cls.ALL

    def evaluate(self, results: Iterable[bool]) -> bool:
        """AND / OR over the results (vacuously true / false on an empty list)."""
        if self is Logic.ANY:
            return any(results)
        return all(results)


_MODE_ALIASES: dict[str, Mode] = {
    "always": Mode.ALWAYS_VISIBLE,
    "always_visible": Mode.ALWAYS_VISIBLE,
    "if": Mode.SHOW_IF,
    "show_if": Mode.SHOW_IF,
    "show_when": Mode.SHOW_IF,
    "unless": Mode.HIDE_UNLESS,
    "hide_unless": Mode.HIDE_UNLESS,
    "hide_when": Mode.HIDE_UNLESS,
}

_LOGIC_ALIASES: dict[str, Logic] = {
    "all": Logic.ALL,
    "and": Logic.ALL,
    "any": Logic.ANY,
    "or": Logic.ANY,
}


@dataclass(frozen=True)
class Condition:
    """One rule: compare the value of another field against a literal."""

    field_code: str
    operator: Operator
    value: Any = None

    def evaluate(self, values: ValueSource) -> bool:
        """Look up the dependency (missing means None) and apply the operator."""
        return self.operator.evaluate(values.get(self.field_code), self.value)

    def to_config(self) -> dict[str, Any]:
        return {
            "field_code": self.field_code,
            "operator": self.operator.value,
            "value": self.value,
        }

    @classmethod
    def from_config(cls, raw: Any) -> "Condition | None":
        """Build a condition from stored configuration, or None when malformed."""
        if not isinstance(raw, Mapping):
            return None

        field_code = raw.get("field_code", raw.get("field"))
        if not isinstance(field_code, str) or not field_code.strip():
            return None

        operator = Operator.from_value(raw.get("operator"))
        if operator is None:
            return None

        return cls(field_code=field_code.strip(), operator=operator, value=raw.get("value"))


@dataclass(frozen=True)
class VisibilityPolicy:
    """Visibility configuration of a single field.

    ``always_save`` means the field's submitted value is persisted even
    while the field is hidden; the save pipeline reads it, the policy
    itself never writes anything.
    """

    mode: Mode = Mode.ALWAYS_VISIBLE
    logic: Logic = Logic.ALL
    conditions: tuple[Condition, ...] | None = None
    always_save: bool = False

    @classmethod
    def always(cls) -> "VisibilityPolicy":
        return cls()

    @property
    def always_persist(self) -> bool:
        return self.always_save

    def requires_conditions(self) -> bool:
        return self.mode.requires_conditions()

    def dependencies(self) -> frozenset[str]:
        """Codes of the fields this policy reads."""
        if not self.requires_conditions() or not self.conditions:
            return frozenset()
        return frozenset(condition.field_code for condition in self.conditions)

    def evaluate(self, values: Any) -> bool:
        """Decide visibility against a value source (mapping or ``(code) -> value`` getter).

        Every condition is evaluated, in order, before the results are
        combined; there is no short-circuiting.
        """
        if not self.requires_conditions() or not self.conditions:
            return self.mode is Mode.ALWAYS_VISIBLE

        source = as_value_source(values)
        results = [condition.evaluate(source) for condition in self.conditions]
        conditions_met = self.logic.evaluate(results)
        return self.mode.should_show(conditions_met)

    def to_config(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "logic": self.logic.value,
            "conditions": [c.to_config() for c in self.conditions or ()],
            "always_save": self.always_save,
        }

    @classmethod
    def from_config(cls, raw: Any) -> "VisibilityPolicy":
        """Build a policy from stored configuration. Never raises."""
        if isinstance(raw, VisibilityPolicy):
            return raw
        if not isinstance(raw, Mapping):
            if raw is not None:
                logger.warning("Ignoring non-mapping visibility configuration: %r", raw)
            return cls()

        always_save = raw.get("always_save", raw.get("always_persist", False))

        return cls(
            mode=Mode.from_value(raw.get("mode")),
            logic=Logic.from_value(raw.get("logic")),
            conditions=_parse_conditions(raw.get("conditions")),
            always_save=coerce_bool(always_save),
        )


def _parse_conditions(raw: Any) -> tuple[Condition, ...] | None:
    if raw is None:
        return None
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        logger.warning("Ignoring visibility conditions that are not a list: %r", raw)
        return None

    conditions: list[Condition] = []
    for entry in raw:
        condition = Condition.from_config(entry)
        if condition is None:
            logger.warning("Dropping malformed visibility condition: %r", entry)
            continue
        conditions.append(condition)

    return tuple(conditions) or None
