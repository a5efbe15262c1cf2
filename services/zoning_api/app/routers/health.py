from __future__ import annotations

from fastapi import APIRouter, Request

from services.zoning_api.app.models.zoning_models import HealthResponse, ServiceInfoResponse

SERVICE_NAME = "Zoning Lookup API"
SERVICE_VERSION = "1.0.0"

router = APIRouter()


@router.get("/", response_model=ServiceInfoResponse)
def service_info() -> ServiceInfoResponse:
    return ServiceInfoResponse(
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        endpoints=[
            "GET /health",
            "POST /v1/zoning/by-coordinate (latitude, longitude)",
            "POST /v1/zoning/by-address (address)",
        ],
    )


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    ready = getattr(request.app.state, "runtime", None) is not None
    return HealthResponse(status="ok", ready=ready)
