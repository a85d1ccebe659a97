from .custom_field import CustomFieldModel
from .entity_record import EntityRecordModel

__all__ = [
    "CustomFieldModel",
    "EntityRecordModel",
]
