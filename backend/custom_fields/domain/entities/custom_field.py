"""Domain entity — a user-configurable field attached to records of one entity type."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from custom_fields.domain.entities.operator import Operator
from custom_fields.domain.entities.visibility import VisibilityPolicy


class FieldType(str, Enum):
    """Kinds of custom field. Only the traits visibility needs live here."""

    TEXT = "text"
    TEXTAREA = "textarea"
    LINK = "link"
    RICH_EDITOR = "rich_editor"
    COLOR_PICKER = "color_picker"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    DATE_TIME = "date_time"
    SELECT = "select"
    RADIO = "radio"
    MULTI_SELECT = "multi_select"
    CHECKBOX_LIST = "checkbox_list"
    TAGS_INPUT = "tags_input"
    TOGGLE_BUTTONS = "toggle_buttons"
    TOGGLE = "toggle"
    CHECKBOX = "checkbox"

    @classmethod
    def from_value(cls, raw: Any) -> "FieldType":
        try:
            return cls(raw)
        except ValueError:
            return cls.TEXT

    def is_optionable(self) -> bool:
        """Whether values are option ids chosen from a predefined list."""
        return self in _OPTIONABLE

    def has_multiple_values(self) -> bool:
        return self in _MULTI_VALUE

    def compatible_operators(self) -> list[Operator]:
        return list(_COMPATIBLE_OPERATORS[self])


_MULTI_VALUE = frozenset({
    FieldType.MULTI_SELECT,
    FieldType.CHECKBOX_LIST,
    FieldType.TAGS_INPUT,
    FieldType.TOGGLE_BUTTONS,
})

_OPTIONABLE = frozenset({
    FieldType.SELECT,
    FieldType.RADIO,
    FieldType.MULTI_SELECT,
    FieldType.CHECKBOX_LIST,
    FieldType.TOGGLE_BUTTONS,
})

_TEXT_OPERATORS = (
    Operator.EQUALS,
    Operator.NOT_EQUALS,
    Operator.CONTAINS,
    Operator.NOT_CONTAINS,
    Operator.STARTS_WITH,
    Operator.ENDS_WITH,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
    Operator.IN,
    Operator.NOT_IN,
)
_NUMBER_OPERATORS = (
    Operator.EQUALS,
    Operator.NOT_EQUALS,
    Operator.GREATER_THAN,
    Operator.LESS_THAN,
    Operator.GREATER_OR_EQUAL,
    Operator.LESS_OR_EQUAL,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
    Operator.IN,
    Operator.NOT_IN,
)
_DATE_OPERATORS = _NUMBER_OPERATORS[:8]
_CHOICE_OPERATORS = (
    Operator.EQUALS,
    Operator.NOT_EQUALS,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
    Operator.IN,
    Operator.NOT_IN,
)
_MULTI_CHOICE_OPERATORS = (
    Operator.CONTAINS,
    Operator.NOT_CONTAINS,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
)
_BOOLEAN_OPERATORS = (Operator.IS_CHECKED, Operator.IS_UNCHECKED)

_COMPATIBLE_OPERATORS: dict[FieldType, tuple[Operator, ...]] = {
    FieldType.TEXT: _TEXT_OPERATORS,
    FieldType.TEXTAREA: _TEXT_OPERATORS,
    FieldType.LINK: _TEXT_OPERATORS,
    FieldType.RICH_EDITOR: _TEXT_OPERATORS,
    FieldType.COLOR_PICKER: _TEXT_OPERATORS,
    FieldType.NUMBER: _NUMBER_OPERATORS,
    FieldType.CURRENCY: _NUMBER_OPERATORS,
    FieldType.DATE: _DATE_OPERATORS,
    FieldType.DATE_TIME: _DATE_OPERATORS,
    FieldType.SELECT: _CHOICE_OPERATORS,
    FieldType.RADIO: _CHOICE_OPERATORS,
    FieldType.MULTI_SELECT: _MULTI_CHOICE_OPERATORS,
    FieldType.CHECKBOX_LIST: _MULTI_CHOICE_OPERATORS,
    FieldType.TAGS_INPUT: _MULTI_CHOICE_OPERATORS,
    FieldType.TOGGLE_BUTTONS: _MULTI_CHOICE_OPERATORS,
    FieldType.TOGGLE: _BOOLEAN_OPERATORS,
    FieldType.CHECKBOX: _BOOLEAN_OPERATORS,
}


@dataclass
class FieldOption:
    """A predefined choice of an optionable field."""

    id: str
    name: str
    sort_order: int = 0


@dataclass
class CustomField:
    """A named attribute of an entity type, carrying its visibility policy.

    ``code`` is unique within ``entity_type`` and is what visibility
    conditions reference.
    """

    entity_type: str
    code: str
    name: str
    field_type: FieldType = FieldType.TEXT
    options: list[FieldOption] = field(default_factory=list)
    visibility: VisibilityPolicy = field(default_factory=VisibilityPolicy)
    sort_order: int = 0
    active: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def option_name(self, option_id: Any) -> str | None:
        """Resolve an option id (as stored) to the option's display name."""
        key = str(option_id)
        for option in self.options:
            if option.id == key:
                return option.name
        return None

    def update(
        self,
        *,
        name: str | None = None,
        field_type: FieldType | None = None,
        options: list[FieldOption] | None = None,
        visibility: VisibilityPolicy | None = None,
        sort_order: int | None = None,
        active: bool | None = None,
    ) -> None:
        """Update mutable attributes and refresh the updated_at timestamp."""
        if name is not None:
            self.name = name
        if field_type is not None:
            self.field_type = field_type
        if options is not None:
            self.options = options
        if visibility is not None:
            self.visibility = visibility
        if sort_order is not None:
            self.sort_order = sort_order
        if active is not None:
            self.active = active
        self.updated_at = datetime.now(timezone.utc)
