from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CoordinateZoneRequest(BaseModel):
    latitude: float = Field(strict=True)
    longitude: float = Field(strict=True)


class AddressZoneRequest(BaseModel):
    address: str = Field(max_length=512)


class CoordinateZoneResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    zone_code: Optional[str] = Field(default=None, alias="zoneCode")
    zone_description: str = Field(alias="zoneDescription")
    found: bool


class AddressZoneResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    formatted_address: str = Field(alias="formattedAddress")
    latitude: float
    longitude: float
    zone_code: Optional[str] = Field(default=None, alias="zoneCode")
    zone_description: str = Field(alias="zoneDescription")
    found: bool


class ServiceInfoResponse(BaseModel):
    name: str
    version: str
    endpoints: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    ready: bool
