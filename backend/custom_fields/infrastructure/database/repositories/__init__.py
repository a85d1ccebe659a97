from .custom_field_repository import SQLAlchemyCustomFieldRepository
from .entity_record_repository import SQLAlchemyEntityRecordRepository

__all__ = [
    "SQLAlchemyCustomFieldRepository",
    "SQLAlchemyEntityRecordRepository",
]
