"""Condition operators — comparison and membership predicates over loosely-typed values.

Every operator is total: ``Operator.evaluate`` never raises, whatever the
shape of the two operands. Values coming from forms and JSON columns are
loosely typed, so operands are coerced with one consistent rule:

* ``None``, blank strings and empty collections are all "empty" and are
  equal to each other.
* If one side is a ``bool`` the other side is read as a boolean
  (``"1"``, ``"true"``, ``"yes"``, ``"on"`` are true).
* If both sides are numeric (numbers or numeric strings) they compare as exact decimals.
* Otherwise both sides compare as strings.
"""

import numbers
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on", "y"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", "n", ""})
_COLLECTION_TYPES = (list, tuple, set, frozenset)


# ── Coercion helpers ────────────────────────────────────────────────

def is_empty_value(value: Any) -> bool:
    """True for ``None``, blank strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (*_COLLECTION_TYPES, dict)):
        return len(value) == 0
    return False


def coerce_bool(value: Any) -> bool:
    """Read a loosely-typed value as a boolean (checkbox / toggle semantics)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
        return True
    if isinstance(value, numbers.Number):
        return value != 0
    if isinstance(value, (*_COLLECTION_TYPES, dict)):
        return len(value) > 0
    return bool(value)


def coerce_number(value: Any) -> Decimal | None:
    """Return ``value`` as an exact, finite ``Decimal``, or None when it is not numeric.

    Integers keep every digit, floats are read through their shortest repr
    (so ``0.1 == "0.1"``) and numeric strings are parsed as decimals.
    Booleans are deliberately not numeric.
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, Decimal)):
            number = Decimal(value)
        elif isinstance(value, numbers.Rational):
            number = Decimal(value.numerator) / Decimal(value.denominator)
        elif isinstance(value, numbers.Real):
            number = Decimal(repr(float(value)))
        elif isinstance(value, str):
            number = Decimal(value.strip())
        else:
            return None
    except (InvalidOperation, ValueError, OverflowError):
        return None
    return number if number.is_finite() else None


def _is_collection(value: Any) -> bool:
    return isinstance(value, _COLLECTION_TYPES)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _scalar_equals(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return coerce_bool(left) == coerce_bool(right)

    left_number, right_number = coerce_number(left), coerce_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number

    return _as_text(left) == _as_text(right)


def values_equal(left: Any, right: Any) -> bool:
    """Loose equality used by ``equals`` and the membership operators."""
    left_empty, right_empty = is_empty_value(left), is_empty_value(right)
    if left_empty or right_empty:
        return left_empty and right_empty

    if _is_collection(left) and _is_collection(right):
        left_items, right_items = list(left), list(right)
        if len(left_items) != len(right_items):
            return False
        return all(
            any(values_equal(a, b) for b in right_items) for a in left_items
        ) and all(
            any(values_equal(b, a) for a in left_items) for b in right_items
        )

    if _is_collection(left) or _is_collection(right):
        return False

    return _scalar_equals(left, right)


def _contains(field_value: Any, rule_value: Any) -> bool:
    if is_empty_value(field_value) or is_empty_value(rule_value):
        return False

    if _is_collection(field_value):
        items = list(field_value)
        if _is_collection(rule_value):
            # Every requested element must be present
            return all(any(values_equal(item, wanted) for item in items) for wanted in rule_value)
        return any(values_equal(item, rule_value) for item in items)

    if _is_collection(rule_value):
        return False

    return _as_text(rule_value) in _as_text(field_value)


def _starts_with(field_value: Any, rule_value: Any) -> bool:
    if _is_collection(field_value) or _is_collection(rule_value):
        return False
    if is_empty_value(field_value) or is_empty_value(rule_value):
        return False
    return _as_text(field_value).startswith(_as_text(rule_value))


def _ends_with(field_value: Any, rule_value: Any) -> bool:
    if _is_collection(field_value) or _is_collection(rule_value):
        return False
    if is_empty_value(field_value) or is_empty_value(rule_value):
        return False
    return _as_text(field_value).endswith(_as_text(rule_value))


def parse_multiple_values(value: Any) -> list[Any]:
    """Rule values for ``in``/``not_in``: a list, or a comma-separated string."""
    if is_empty_value(value):
        return []
    if _is_collection(value):
        return list(value)
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [value]


def _is_in(field_value: Any, rule_value: Any) -> bool:
    candidates = parse_multiple_values(rule_value)
    if not candidates or is_empty_value(field_value):
        return False
    if _is_collection(field_value):
        return any(values_equal(item, c) for item in field_value for c in candidates)
    return any(values_equal(field_value, c) for c in candidates)


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    """Build an ordered comparison: numeric when both sides are numeric, else textual."""

    def evaluate(field_value: Any, rule_value: Any) -> bool:
        if is_empty_value(field_value) or is_empty_value(rule_value):
            return False
        if _is_collection(field_value) or _is_collection(rule_value):
            return False
        left, right = coerce_number(field_value), coerce_number(rule_value)
        if left is not None and right is not None:
            return compare(left, right)
        return compare(_as_text(field_value), _as_text(rule_value))

    return evaluate


# ── Operator enum ───────────────────────────────────────────────────

class Operator(str, Enum):
    """Closed set of comparison / membership predicates for visibility conditions."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS_OR_EQUAL = "less_or_equal"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    IN = "in"
    NOT_IN = "not_in"
    IS_CHECKED = "is_checked"
    IS_UNCHECKED = "is_unchecked"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_value(cls, raw: Any) -> "Operator | None":
        """Parse an operator from its value or a known alias; None when unknown."""
        if isinstance(raw, Operator):
            return raw
        if not isinstance(raw, str):
            return None
        key = raw.strip().lower().replace("-", "_").replace(" ", "_")
        return _ALIASES.get(key)

    def requires_value(self) -> bool:
        """Whether a comparison value must be configured for this operator."""
        return self not in (
            Operator.IS_EMPTY,
            Operator.IS_NOT_EMPTY,
            Operator.IS_CHECKED,
            Operator.IS_UNCHECKED,
        )

    def supports_multiple_values(self) -> bool:
        return self in (Operator.IN, Operator.NOT_IN)

    def evaluate(self, field_value: Any, rule_value: Any) -> bool:
        """Apply the predicate. Never raises; an unexpected failure is a non-match."""
        try:
            return bool(_EVALUATORS[self](field_value, rule_value))
        except (TypeError, ValueError, ArithmeticError, RecursionError):
            return False

    @classmethod
    def options(cls) -> dict[str, str]:
        return {op.value: op.label for op in cls}

    @classmethod
    def common_options(cls) -> dict[str, str]:
        """The most frequently used operators, for compact selects."""
        common = (
            cls.EQUALS,
            cls.NOT_EQUALS,
            cls.GREATER_THAN,
            cls.LESS_THAN,
            cls.GREATER_OR_EQUAL,
            cls.LESS_OR_EQUAL,
            cls.CONTAINS,
            cls.NOT_CONTAINS,
            cls.IS_EMPTY,
            cls.IS_NOT_EMPTY,
        )
        return {op.value: op.label for op in common}


_LABELS: dict[Operator, str] = {
    Operator.EQUALS: "Equals",
    Operator.NOT_EQUALS: "Not equals",
    Operator.GREATER_THAN: "Greater than",
    Operator.LESS_THAN: "Less than",
    Operator.GREATER_OR_EQUAL: "Greater or equal",
    Operator.LESS_OR_EQUAL: "Less or equal",
    Operator.CONTAINS: "Contains",
    Operator.NOT_CONTAINS: "Not contains",
    Operator.STARTS_WITH: "Starts with",
    Operator.ENDS_WITH: "Ends with",
    Operator.IS_EMPTY: "Is empty",
    Operator.IS_NOT_EMPTY: "Is not empty",
    Operator.IN: "In list",
    Operator.NOT_IN: "Not in list",
    Operator.IS_CHECKED: "Is checked",
    Operator.IS_UNCHECKED: "Is unchecked",
}

_EVALUATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQUALS: values_equal,
    Operator.NOT_EQUALS: lambda field, rule: not values_equal(field, rule),
    Operator.GREATER_THAN: _ordered(lambda a, b: a > b),
    Operator.LESS_THAN: _ordered(lambda a, b: a < b),
    Operator.GREATER_OR_EQUAL: _ordered(lambda a, b: a >= b),
    Operator.LESS_OR_EQUAL: _ordered(lambda a, b: a <= b),
    Operator.CONTAINS: _contains,
    Operator.NOT_CONTAINS: lambda field, rule: not _contains(field, rule),
    Operator.STARTS_WITH: _starts_with,
    Operator.ENDS_WITH: _ends_with,
    Operator.IS_EMPTY: lambda field, _rule: is_empty_value(field),
    Operator.IS_NOT_EMPTY: lambda field, _rule: not is_empty_value(field),
    Operator.IN: _is_in,
    Operator.NOT_IN: lambda field, rule: not _is_in(field, rule),
    Operator.IS_CHECKED: lambda field, _rule: coerce_bool(field),
    Operator.IS_UNCHECKED: lambda field, _rule: not coerce_bool(field),
}

# Legacy / shorthand spellings found in stored configuration
_ALIASES: dict[str, Operator] = {
    **{op.value: op for op in Operator},
    "=": Operator.EQUALS,
    "==": Operator.EQUALS,
    "eq": Operator.EQUALS,
    "!=": Operator.NOT_EQUALS,
    "<>": Operator.NOT_EQUALS,
    "neq": Operator.NOT_EQUALS,
    ">": Operator.GREATER_THAN,
    "gt": Operator.GREATER_THAN,
    "<": Operator.LESS_THAN,
    "lt": Operator.LESS_THAN,
    ">=": Operator.GREATER_OR_EQUAL,
    "gte": Operator.GREATER_OR_EQUAL,
    "greater_than_or_equal": Operator.GREATER_OR_EQUAL,
    "<=": Operator.LESS_OR_EQUAL,
    "lte": Operator.LESS_OR_EQUAL,
    "less_than_or_equal": Operator.LESS_OR_EQUAL,
    "empty": Operator.IS_EMPTY,
    "not_empty": Operator.IS_NOT_EMPTY,
    "nin": Operator.NOT_IN,
}
