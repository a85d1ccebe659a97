from .custom_field import (
    CustomFieldCreate,
    CustomFieldResponse,
    CustomFieldUpdate,
    FieldOptionSchema,
    VisibilityConditionSchema,
    VisibilitySchema,
)
from .visibility import (
    DependencyMapResponse,
    FieldMetadataResponse,
    FieldStateResponse,
    VisibilityEvaluateRequest,
    VisibilityEvaluateResponse,
)
from .record import RecordSaveResponse, RecordValuesResponse, RecordValuesUpdate

__all__ = [
    "CustomFieldCreate",
    "CustomFieldResponse",
    "CustomFieldUpdate",
    "FieldOptionSchema",
    "VisibilityConditionSchema",
    "VisibilitySchema",
    "DependencyMapResponse",
    "FieldMetadataResponse",
    "FieldStateResponse",
    "VisibilityEvaluateRequest",
    "VisibilityEvaluateResponse",
    "RecordSaveResponse",
    "RecordValuesResponse",
    "RecordValuesUpdate",
]
