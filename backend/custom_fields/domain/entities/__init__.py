from .operator import Operator
from .visibility import Condition, Logic, Mode, VisibilityPolicy
from .custom_field import CustomField, FieldOption, FieldType
from .entity_record import EntityRecord
from .field_state import FieldState

__all__ = [
    "Operator",
    "Condition",
    "Logic",
    "Mode",
    "VisibilityPolicy",
    "CustomField",
    "FieldOption",
    "FieldType",
    "EntityRecord",
    "FieldState",
]
