"""Custom field definition CRUD endpoints and the dependency map."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from custom_fields.application.schemas import (
    CustomFieldCreate,
    CustomFieldResponse,
    CustomFieldUpdate,
    DependencyMapResponse,
    FieldMetadataResponse,
)
from custom_fields.application.services import CustomFieldService
from custom_fields.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from custom_fields.infrastructure.dependencies import get_custom_field_service

router = APIRouter(prefix="/custom-fields", tags=["Custom Fields"])


@router.get("", response_model=list[CustomFieldResponse])
async def list_fields(
    entity_type: str | None = Query(None, description="Filter by entity type"),
    active_only: bool = Query(False, description="Only return active fields"),
    service: CustomFieldService = Depends(get_custom_field_service),
) -> list[CustomFieldResponse]:
    """Retrieve field definitions, ordered by entity type and sort order."""
    fields = await service.list_fields(entity_type=entity_type, active_only=active_only)
    return [CustomFieldResponse.from_entity(f) for f in fields]


@router.get("/dependencies", response_model=DependencyMapResponse)
async def get_dependencies(
    entity_type: str = Query(..., description="Entity type to compute the dependency map for"),
    service: CustomFieldService = Depends(get_custom_field_service),
) -> DependencyMapResponse:
    """Which fields must be live, which fields each of them affects, and per-field wiring."""
    dependencies = await service.get_dependencies(entity_type)
    metadata = await service.get_field_metadata(entity_type)
    return DependencyMapResponse(
        entity_type=entity_type,
        dependencies={code: sorted(codes) for code, codes in sorted(dependencies.items())},
        live_codes=sorted(code for code, codes in dependencies.items() if codes),
        fields=[FieldMetadataResponse(**m) for m in metadata],
    )


@router.get("/{field_id}", response_model=CustomFieldResponse)
async def get_field(
    field_id: str,
    service: CustomFieldService = Depends(get_custom_field_service),
) -> CustomFieldResponse:
    """Retrieve a single field definition by ID."""
    try:
        custom_field = await service.get_field(field_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CustomFieldResponse.from_entity(custom_field)


@router.post("", response_model=CustomFieldResponse, status_code=status.HTTP_201_CREATED)
async def create_field(
    data: CustomFieldCreate,
    service: CustomFieldService = Depends(get_custom_field_service),
) -> CustomFieldResponse:
    """Create a new field definition. Codes are unique per entity type."""
    try:
        custom_field = await service.create_field(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return CustomFieldResponse.from_entity(custom_field)


@router.put("/{field_id}", response_model=CustomFieldResponse)
async def update_field(
    field_id: str,
    data: CustomFieldUpdate,
    service: CustomFieldService = Depends(get_custom_field_service),
) -> CustomFieldResponse:
    """Update an existing field definition."""
    try:
        custom_field = await service.update_field(field_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CustomFieldResponse.from_entity(custom_field)


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_field(
    field_id: str,
    service: CustomFieldService = Depends(get_custom_field_service),
) -> None:
    """Delete a field definition by ID."""
    try:
        await service.delete_field(field_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
