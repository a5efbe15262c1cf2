from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from packages.zoning_core.errors import ConfigurationError
from packages.zoning_core.geocoder import GoogleGeocoder
from packages.zoning_core.pipeline import ZoningPipeline
from packages.zoning_core.projection import CoordinateProjector
from packages.zoning_core.resolver import ZoneResolver
from packages.zoning_core.settings import ZoningSettings
from packages.zoning_core.store import InMemoryZoneStore, PostgisZoneStore, ZoneStore, create_zone_engine

logger = logging.getLogger(__name__)


@dataclass
class ZoningRuntime:
    """Process-scoped collaborators, built once at startup and closed at shutdown."""

    pipeline: ZoningPipeline
    _closers: list[Callable[[], None]] = field(default_factory=list)

    def close(self) -> None:
        while self._closers:
            closer = self._closers.pop()
            closer()


def _build_store(settings: ZoningSettings) -> tuple[ZoneStore, Optional[Callable[[], None]]]:
    if settings.has_database():
        store = PostgisZoneStore(create_zone_engine(settings))
        return store, store.dispose
    if settings.allow_memory_store:
        logger.warning("DATABASE_URL not set; using in-memory zoning store")
        if settings.memory_geojson_path:
            return InMemoryZoneStore.from_geojson(settings.memory_geojson_path), None
        return InMemoryZoneStore(), None
    raise ConfigurationError(
        "DATABASE_URL must be postgresql://. Set ZONING_ALLOW_MEMORY_STORE=1 for a local in-memory store."
    )


def build_runtime(settings: ZoningSettings) -> ZoningRuntime:
    store, store_closer = _build_store(settings)
    geocoder = GoogleGeocoder.from_settings(settings)
    if not settings.has_geocoder_key():
        logger.warning("GOOGLE_API_KEY not set; address lookups will fail with a configuration error")

    runtime = ZoningRuntime(pipeline=ZoningPipeline(geocoder, ZoneResolver(store, CoordinateProjector())))
    if store_closer is not None:
        runtime._closers.append(store_closer)
    runtime._closers.append(geocoder.close)
    return runtime
