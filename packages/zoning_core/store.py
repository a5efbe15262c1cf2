from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol

from shapely.geometry import Point, shape
from shapely.geometry.base import BaseGeometry
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from packages.zoning_core.errors import ConfigurationError, TransportError
from packages.zoning_core.projection import STORE_SRID
from packages.zoning_core.settings import ZoningSettings
from packages.zoning_core.types import UNNAMED_ZONE_MESSAGE, ProjectedPoint, ZoneRecord

logger = logging.getLogger(__name__)

STORE_NAME = "spatial_store"
# PostgreSQL SQLSTATE for a statement cancelled by statement_timeout.
_QUERY_CANCELED = "57014"

# Overlapping polygons are a data problem; LIMIT 1 keeps whichever row the planner yields first.
ZONE_AT_POINT_SQL = text(
    """
    SELECT z.zl_zona AS code, z.zl_txt_zon AS description
    FROM zoneamento z
    WHERE ST_Contains(z.geom, ST_SetSRID(ST_MakePoint(:x, :y), :srid))
    LIMIT 1
    """
)


class ZoneStore(Protocol):
    def find_zone(self, point: ProjectedPoint) -> Optional[ZoneRecord]:
        ...


def _zone_from_row(code: Any, description: Any) -> ZoneRecord:
    # A matched polygon with a NULL code is still a match; the code stays null.
    return ZoneRecord(
        code=None if code is None else str(code),
        description=str(description or "").strip() or UNNAMED_ZONE_MESSAGE,
    )


def create_zone_engine(settings: ZoningSettings) -> Engine:
    if not settings.has_database():
        raise ConfigurationError("DATABASE_URL must be postgresql:// for the zoning store")
    connect_args: dict[str, Any] = {
        "options": f"-c statement_timeout={int(settings.db_statement_timeout_ms)}",
    }
    if settings.db_sslmode:
        connect_args["sslmode"] = settings.db_sslmode
    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout_sec,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


class PostgisZoneStore:
    """Point-in-polygon lookups against the PostGIS ``zoneamento`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_zone(self, point: ProjectedPoint) -> Optional[ZoneRecord]:
        params = {"x": point.x, "y": point.y, "srid": point.srid}
        try:
            with self._engine.connect() as conn:
                row = conn.execute(ZONE_AT_POINT_SQL, params).first()
        except PoolTimeoutError as exc:
            logger.error("zoning store pool exhausted: %s", exc)
            raise TransportError(STORE_NAME, "spatial store connection pool timed out", timed_out=True) from exc
        except OperationalError as exc:
            timed_out = getattr(exc.orig, "pgcode", None) == _QUERY_CANCELED
            logger.error("zoning store query failed timed_out=%s: %s", timed_out, exc.__class__.__name__)
            raise TransportError(STORE_NAME, "spatial store query failed", timed_out=timed_out) from exc
        except SQLAlchemyError as exc:
            logger.error("zoning store query failed: %s", exc.__class__.__name__)
            raise TransportError(STORE_NAME, "spatial store query failed") from exc

        if row is None:
            return None
        return _zone_from_row(row[0], row[1])

    def dispose(self) -> None:
        self._engine.dispose()


class InMemoryZoneStore:
    """Shapely-backed store holding polygons already expressed in the store CRS."""

    def __init__(self, features: Iterable[tuple[ZoneRecord, BaseGeometry]] = (), srid: int = STORE_SRID) -> None:
        self.srid = int(srid)
        self._features = list(features)

    def __len__(self) -> int:
        return len(self._features)

    def add(self, zone: ZoneRecord, geometry: BaseGeometry) -> None:
        self._features.append((zone, geometry))

    def find_zone(self, point: ProjectedPoint) -> Optional[ZoneRecord]:
        if point.srid != self.srid:
            raise ValueError(f"point srid {point.srid} does not match store srid {self.srid}")
        candidate = Point(point.x, point.y)
        for zone, geometry in self._features:
            if geometry.contains(candidate):
                return zone
        return None

    @classmethod
    def from_geojson(cls, path: str | Path, srid: int = STORE_SRID) -> "InMemoryZoneStore":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        store = cls(srid=srid)
        for feature in payload.get("features") or []:
            props = dict(feature.get("properties") or {})
            code = props.get("zl_zona") or props.get("code")
            if not code or not feature.get("geometry"):
                continue
            description = props.get("zl_txt_zon") or props.get("description")
            store.add(_zone_from_row(code, description), shape(feature["geometry"]))
        logger.info("loaded %d zoning polygons from %s", len(store), path)
        return store
