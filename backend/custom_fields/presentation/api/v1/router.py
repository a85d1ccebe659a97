"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from custom_fields.presentation.api.v1.endpoints.health import router as health_router
from custom_fields.presentation.api.v1.endpoints.custom_fields import router as custom_fields_router
from custom_fields.presentation.api.v1.endpoints.visibility import router as visibility_router
from custom_fields.presentation.api.v1.endpoints.records import router as records_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(custom_fields_router)
router.include_router(visibility_router)
router.include_router(records_router)
