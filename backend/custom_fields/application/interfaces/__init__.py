from .custom_field_repository import CustomFieldRepository
from .entity_record_repository import EntityRecordRepository

__all__ = [
    "CustomFieldRepository",
    "EntityRecordRepository",
]
