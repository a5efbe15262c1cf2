from __future__ import annotations

from pyproj import Transformer

from packages.zoning_core.types import Coordinate, ProjectedPoint

WGS84_SRID = 4326
# SIRGAS 2000 / UTM zone 23S, the grid the zoning polygons are stored in.
STORE_SRID = 31983


class CoordinateProjector:
    """Reprojects between WGS84 and the spatial store's CRS.

    The SRID stamped on every emitted point is the one the transform targets,
    so the store always builds its query point in the same CRS.
    """

    def __init__(self, target_srid: int = STORE_SRID) -> None:
        self.target_srid = int(target_srid)
        self._forward = Transformer.from_crs(f"EPSG:{WGS84_SRID}", f"EPSG:{self.target_srid}", always_xy=True)
        self._inverse = Transformer.from_crs(f"EPSG:{self.target_srid}", f"EPSG:{WGS84_SRID}", always_xy=True)

    def to_store(self, coordinate: Coordinate) -> ProjectedPoint:
        x, y = self._forward.transform(coordinate.longitude, coordinate.latitude)
        return ProjectedPoint(x=float(x), y=float(y), srid=self.target_srid)

    def to_wgs84(self, point: ProjectedPoint) -> Coordinate:
        if point.srid != self.target_srid:
            raise ValueError(f"point srid {point.srid} does not match projector srid {self.target_srid}")
        lng, lat = self._inverse.transform(point.x, point.y)
        return Coordinate(latitude=float(lat), longitude=float(lng))
