"""Pydantic DTOs (Data Transfer Objects) for the CustomField feature."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from custom_fields.domain.entities import CustomField, FieldOption, FieldType, VisibilityPolicy


class FieldOptionSchema(BaseModel):
    """A predefined choice of an optionable field."""

    id: str = Field(..., min_length=1, max_length=64, examples=["1"])
    name: str = Field(..., min_length=1, max_length=255, examples=["United States"])
    sort_order: int = 0


class VisibilityConditionSchema(BaseModel):
    """One condition as stored in configuration. Operators are validated leniently."""

    field_code: str = Field(..., examples=["country"])
    operator: str = Field(..., examples=["equals"])
    value: Any = Field(None, examples=["US"])


class VisibilitySchema(BaseModel):
    """Visibility configuration shape.

    ``mode`` and ``logic`` are plain strings on purpose: unknown values are
    accepted and fall back to "always" / "all" when converted to a policy.
    """

    mode: str = Field("always", examples=["if"])
    logic: str = Field("all", examples=["all"])
    conditions: list[VisibilityConditionSchema] | None = None
    always_save: bool = False

    def to_policy(self) -> VisibilityPolicy:
        return VisibilityPolicy.from_config(self.model_dump())

    @classmethod
    def from_policy(cls, policy: VisibilityPolicy) -> "VisibilitySchema":
        return cls.model_validate(policy.to_config())


class CustomFieldCreate(BaseModel):
    """Schema for creating a new field definition."""

    entity_type: str = Field(..., min_length=1, max_length=100, examples=["contact"])
    code: str = Field(..., min_length=1, max_length=100, examples=["state"])
    name: str = Field(..., min_length=1, max_length=255, examples=["State"])
    field_type: FieldType = FieldType.TEXT
    options: list[FieldOptionSchema] = Field(default_factory=list)
    visibility: VisibilitySchema | None = None
    sort_order: int = 0
    active: bool = True

    def to_entity(self) -> CustomField:
        return CustomField(
            entity_type=self.entity_type,
            code=self.code,
            name=self.name,
            field_type=self.field_type,
            options=[FieldOption(**o.model_dump()) for o in self.options],
            visibility=self.visibility.to_policy() if self.visibility else VisibilityPolicy(),
            sort_order=self.sort_order,
            active=self.active,
        )


class CustomFieldUpdate(BaseModel):
    """Schema for updating an existing field definition — all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    field_type: FieldType | None = None
    options: list[FieldOptionSchema] | None = None
    visibility: VisibilitySchema | None = None
    sort_order: int | None = None
    active: bool | None = None


class CustomFieldResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    entity_type: str
    code: str
    name: str
    field_type: FieldType
    options: list[FieldOptionSchema]
    visibility: VisibilitySchema
    sort_order: int
    active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, custom_field: CustomField) -> "CustomFieldResponse":
        return cls(
            id=custom_field.id,
            entity_type=custom_field.entity_type,
            code=custom_field.code,
            name=custom_field.name,
            field_type=custom_field.field_type,
            options=[
                FieldOptionSchema(id=o.id, name=o.name, sort_order=o.sort_order)
                for o in custom_field.options
            ],
            visibility=VisibilitySchema.from_policy(custom_field.visibility),
            sort_order=custom_field.sort_order,
            active=custom_field.active,
            created_at=custom_field.created_at,
            updated_at=custom_field.updated_at,
        )
