from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from packages.zoning_core.errors import ConfigurationError
from packages.zoning_core.pipeline import ZoningPipeline
from services.zoning_api.app.models.zoning_models import (
    AddressZoneRequest,
    AddressZoneResponse,
    CoordinateZoneRequest,
    CoordinateZoneResponse,
)

router = APIRouter()


def get_pipeline(request: Request) -> ZoningPipeline:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise ConfigurationError("zoning runtime is not initialised")
    return runtime.pipeline


# Plain ``def`` handlers run in the threadpool, one task per request.
@router.post("/by-coordinate", response_model=CoordinateZoneResponse)
def zone_by_coordinate(
    payload: CoordinateZoneRequest,
    pipeline: ZoningPipeline = Depends(get_pipeline),
) -> CoordinateZoneResponse:
    result = pipeline.resolve_by_coordinate(payload.latitude, payload.longitude)
    return CoordinateZoneResponse(
        zone_code=result.zone_code,
        zone_description=result.zone_description,
        found=result.found,
    )


@router.post("/by-address", response_model=AddressZoneResponse)
def zone_by_address(
    payload: AddressZoneRequest,
    pipeline: ZoningPipeline = Depends(get_pipeline),
) -> AddressZoneResponse:
    resolution = pipeline.resolve_by_address(payload.address)
    return AddressZoneResponse(
        formatted_address=resolution.formatted_address,
        latitude=resolution.coordinate.latitude,
        longitude=resolution.coordinate.longitude,
        zone_code=resolution.zone_result.zone_code,
        zone_description=resolution.zone_result.zone_description,
        found=resolution.zone_result.found,
    )
