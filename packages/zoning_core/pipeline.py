from __future__ import annotations

import logging
import math
from typing import Any, Protocol

from packages.zoning_core.errors import GeocodingError, InvalidInputError
from packages.zoning_core.resolver import ZoneResolver
from packages.zoning_core.types import AddressResolution, Coordinate, GeocodeResult, ZoneQueryResult

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    def geocode(self, address: str) -> GeocodeResult:
        ...


def _as_degrees(value: Any, name: str) -> float:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{name} must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be a finite number")
    return number


def validate_coordinate(latitude: Any, longitude: Any) -> Coordinate:
    coordinate = Coordinate(latitude=_as_degrees(latitude, "latitude"), longitude=_as_degrees(longitude, "longitude"))
    if not coordinate.is_valid():
        raise InvalidInputError("latitude must be within [-90, 90] and longitude within [-180, 180]")
    return coordinate


class ZoningPipeline:
    """Address -> coordinate -> zone, or coordinate -> zone.

    Holds no per-request state; the collaborators are process-scoped.
    """

    def __init__(self, geocoder: Geocoder, resolver: ZoneResolver) -> None:
        self.geocoder = geocoder
        self.resolver = resolver

    def resolve_by_coordinate(self, latitude: Any, longitude: Any) -> ZoneQueryResult:
        coordinate = validate_coordinate(latitude, longitude)
        return self.resolver.resolve(coordinate)

    def resolve_by_address(self, address: Any) -> AddressResolution:
        cleaned = address.strip() if isinstance(address, str) else ""
        if not cleaned:
            raise InvalidInputError("address is required")

        geocoded = self.geocoder.geocode(cleaned)
        coordinate = geocoded.coordinate
        if not coordinate.is_valid():
            raise GeocodingError("INVALID_COORDINATE")

        logger.info("geocoded address to lat=%.6f lng=%.6f", coordinate.latitude, coordinate.longitude)
        zone_result = self.resolver.resolve(coordinate)
        return AddressResolution(
            formatted_address=geocoded.formatted_address,
            coordinate=coordinate,
            zone_result=zone_result,
        )
