from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

NOT_FOUND_MESSAGE = "Zoneamento não encontrado para esse ponto."
UNNAMED_ZONE_MESSAGE = "Zoneamento não identificado."


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(frozen=True)
class ProjectedPoint:
    """Point in the spatial store's native projected reference system."""

    x: float
    y: float
    srid: int


@dataclass(frozen=True)
class GeocodeResult:
    formatted_address: str
    coordinate: Coordinate


@dataclass(frozen=True)
class ZoneRecord:
    code: Optional[str]
    description: str


@dataclass(frozen=True)
class ZoneQueryResult:
    found: bool
    zone: Optional[ZoneRecord] = None
    fallback_message: str = NOT_FOUND_MESSAGE

    @classmethod
    def matched(cls, zone: ZoneRecord) -> "ZoneQueryResult":
        return cls(found=True, zone=zone, fallback_message="")

    @classmethod
    def not_found(cls) -> "ZoneQueryResult":
        return cls(found=False, zone=None, fallback_message=NOT_FOUND_MESSAGE)

    @property
    def zone_code(self) -> Optional[str]:
        return self.zone.code if self.zone else None

    @property
    def zone_description(self) -> str:
        return self.zone.description if self.zone else self.fallback_message


@dataclass(frozen=True)
class AddressResolution:
    formatted_address: str
    coordinate: Coordinate
    zone_result: ZoneQueryResult
