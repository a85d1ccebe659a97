from .dependency_resolver import DependencyResolver
from .visibility_logic_service import VisibilityLogicService
from .backend_visibility_service import BackendVisibilityService
from .frontend_visibility_service import FrontendVisibilityService
from .custom_field_service import CustomFieldService
from .field_value_service import FieldValueService, SaveResult
from .field_definition_compiler import FieldDefinitionCompiler

__all__ = [
    "DependencyResolver",
    "VisibilityLogicService",
    "BackendVisibilityService",
    "FrontendVisibilityService",
    "CustomFieldService",
    "FieldValueService",
    "SaveResult",
    "FieldDefinitionCompiler",
]
