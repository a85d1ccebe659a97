"""Pydantic DTOs for visibility evaluation and dependency wiring."""

from typing import Any

from pydantic import BaseModel, Field

from custom_fields.domain.entities import FieldState


class VisibilityEvaluateRequest(BaseModel):
    """In-progress form state to evaluate the fields of an entity type against."""

    entity_type: str = Field(..., min_length=1, max_length=100, examples=["contact"])
    values: dict[str, Any] = Field(default_factory=dict, examples=[{"country": "US"}])


class FieldStateResponse(BaseModel):
    """Visibility decision for one field."""

    code: str
    visible: bool
    live: bool
    always_save: bool
    dehydrated: bool

    @classmethod
    def from_state(cls, state: FieldState) -> "FieldStateResponse":
        return cls(
            code=state.code,
            visible=state.visible,
            live=state.live,
            always_save=state.always_save,
            dehydrated=state.dehydrated,
        )


class VisibilityEvaluateResponse(BaseModel):
    entity_type: str
    fields: list[FieldStateResponse]
    visible_codes: list[str]


class FieldMetadataResponse(BaseModel):
    """What a client-side schema builder needs to wire one field."""

    code: str
    type: str
    is_optionable: bool
    has_multiple_values: bool
    compatible_operators: list[str]
    has_visibility_conditions: bool
    visibility_mode: str
    visibility_logic: str
    visibility_conditions: list[dict[str, Any]]
    dependent_fields: list[str]
    always_save: bool
    live: bool


class DependencyMapResponse(BaseModel):
    """Source field code → codes of the fields whose visibility reads it."""

    entity_type: str
    dependencies: dict[str, list[str]]
    live_codes: list[str]
    fields: list[FieldMetadataResponse] = Field(default_factory=list)
