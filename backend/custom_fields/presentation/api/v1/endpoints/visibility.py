"""Reactive visibility evaluation of an in-progress form state."""

from fastapi import APIRouter, Depends

from custom_fields.application.schemas import (
    FieldStateResponse,
    VisibilityEvaluateRequest,
    VisibilityEvaluateResponse,
)
from custom_fields.application.services import CustomFieldService, FrontendVisibilityService
from custom_fields.infrastructure.dependencies import (
    get_custom_field_service,
    get_frontend_visibility_service,
)

router = APIRouter(prefix="/visibility", tags=["Visibility"])


@router.post("/evaluate", response_model=VisibilityEvaluateResponse)
async def evaluate_visibility(
    data: VisibilityEvaluateRequest,
    fields_service: CustomFieldService = Depends(get_custom_field_service),
    visibility: FrontendVisibilityService = Depends(get_frontend_visibility_service),
) -> VisibilityEvaluateResponse:
    """Evaluate every active field of the entity type against unsaved values.

    Nothing is persisted; unknown codes in ``values`` are simply unread.
    """
    fields = await fields_service.list_fields(entity_type=data.entity_type, active_only=True)
    states = visibility.build_field_states(fields, data.values)
    return VisibilityEvaluateResponse(
        entity_type=data.entity_type,
        fields=[FieldStateResponse.from_state(s) for s in states],
        visible_codes=[s.code for s in states if s.visible],
    )
