"""Read and save the custom field values of a host record."""

from fastapi import APIRouter, Depends, HTTPException, status

from custom_fields.application.schemas import (
    RecordSaveResponse,
    RecordValuesResponse,
    RecordValuesUpdate,
)
from custom_fields.application.services import FieldValueService
from custom_fields.domain.exceptions import EntityNotFoundError
from custom_fields.infrastructure.dependencies import get_field_value_service

router = APIRouter(prefix="/records", tags=["Records"])


@router.get("/{entity_type}/{record_id}", response_model=RecordValuesResponse)
async def get_record_values(
    entity_type: str,
    record_id: str,
    service: FieldValueService = Depends(get_field_value_service),
) -> RecordValuesResponse:
    """Stored values of the fields visible for this record; hidden ones are listed by code."""
    try:
        values, hidden = await service.get_visible_values(entity_type, record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return RecordValuesResponse(
        entity_type=entity_type,
        record_id=record_id,
        values=values,
        hidden_codes=hidden,
    )


@router.put("/{entity_type}/{record_id}", response_model=RecordSaveResponse)
async def save_record_values(
    entity_type: str,
    record_id: str,
    data: RecordValuesUpdate,
    service: FieldValueService = Depends(get_field_value_service),
) -> RecordSaveResponse:
    """Save submitted values; values of fields hidden by the submitted state are not written."""
    result = await service.save_values(entity_type, record_id, data.values)
    return RecordSaveResponse(
        entity_type=entity_type,
        record_id=record_id,
        values=result.record.values,
        written=result.written,
        skipped=result.skipped,
    )
