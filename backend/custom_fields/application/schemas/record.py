"""Pydantic DTOs for reading and saving the custom field values of a record."""

from typing import Any

from pydantic import BaseModel, Field


class RecordValuesUpdate(BaseModel):
    """Submitted form values, keyed by field code."""

    values: dict[str, Any] = Field(..., examples=[{"country": "US", "state": "CA"}])


class RecordValuesResponse(BaseModel):
    """The visible custom field values of a stored record."""

    entity_type: str
    record_id: str
    values: dict[str, Any]
    hidden_codes: list[str]


class RecordSaveResponse(BaseModel):
    """Outcome of the save pipeline: which submitted values were written or skipped."""

    entity_type: str
    record_id: str
    values: dict[str, Any]
    written: list[str]
    skipped: list[str]
