from __future__ import annotations

import logging
import math
from typing import Optional

from packages.zoning_core.projection import CoordinateProjector
from packages.zoning_core.store import ZoneStore
from packages.zoning_core.types import Coordinate, ZoneQueryResult

logger = logging.getLogger(__name__)


class ZoneResolver:
    """Finds the zoning polygon containing a WGS84 coordinate.

    Range validation belongs to the caller; only the shape of the coordinate
    is checked here. A point outside every polygon is a normal result.
    """

    def __init__(self, store: ZoneStore, projector: Optional[CoordinateProjector] = None) -> None:
        self.store = store
        self.projector = projector or CoordinateProjector()

    def resolve(self, coordinate: Coordinate) -> ZoneQueryResult:
        if not isinstance(coordinate, Coordinate):
            raise TypeError(f"expected Coordinate, got {type(coordinate).__name__}")
        if not (math.isfinite(coordinate.latitude) and math.isfinite(coordinate.longitude)):
            raise ValueError("coordinate components must be finite numbers")

        point = self.projector.to_store(coordinate)
        zone = self.store.find_zone(point)
        if zone is None:
            logger.info("no zone at lat=%.6f lng=%.6f", coordinate.latitude, coordinate.longitude)
            return ZoneQueryResult.not_found()

        logger.info("zone %s at lat=%.6f lng=%.6f", zone.code, coordinate.latitude, coordinate.longitude)
        return ZoneQueryResult.matched(zone)
