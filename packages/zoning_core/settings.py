from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_GEOCODER_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"


def normalize_database_url(url: str) -> str:
    """Rewrite the Heroku-style ``postgres://`` scheme to the one SQLAlchemy accepts."""
    url = (url or "").strip()
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgres+"):
        return "postgresql+" + url[len("postgres+"):]
    return url


def _env_str(name: str, default: str = "") -> str:
    return str(os.getenv(name) or default).strip()


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ZoningSettings:
    database_url: str = ""
    google_api_key: str = ""
    geocoder_endpoint: str = DEFAULT_GEOCODER_ENDPOINT
    geocoder_timeout_sec: float = 5.0
    geocoder_region: Optional[str] = None
    geocoder_language: Optional[str] = None
    db_pool_size: int = 5
    db_pool_timeout_sec: float = 5.0
    db_statement_timeout_ms: int = 3000
    db_sslmode: str = "require"
    allow_memory_store: bool = False
    memory_geojson_path: Optional[str] = None
    cors_allow_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        object.__setattr__(self, "database_url", normalize_database_url(self.database_url))

    def has_database(self) -> bool:
        return self.database_url.startswith("postgresql")

    def has_geocoder_key(self) -> bool:
        return bool(self.google_api_key)


def load_settings() -> ZoningSettings:
    origins = [item.strip() for item in _env_str("CORS_ALLOW_ORIGINS", "*").split(",") if item.strip()]
    return ZoningSettings(
        database_url=_env_str("DATABASE_URL"),
        google_api_key=_env_str("GOOGLE_API_KEY"),
        geocoder_endpoint=_env_str("GEOCODER_ENDPOINT", DEFAULT_GEOCODER_ENDPOINT),
        geocoder_timeout_sec=_env_float("GEOCODER_TIMEOUT_SEC", 5.0),
        geocoder_region=_env_str("GEOCODER_REGION") or None,
        geocoder_language=_env_str("GEOCODER_LANGUAGE") or None,
        db_pool_size=_env_int("ZONING_DB_POOL_SIZE", 5),
        db_pool_timeout_sec=_env_float("ZONING_DB_POOL_TIMEOUT_SEC", 5.0),
        db_statement_timeout_ms=_env_int("ZONING_DB_STATEMENT_TIMEOUT_MS", 3000),
        db_sslmode=_env_str("ZONING_DB_SSLMODE", "require"),
        allow_memory_store=_env_str("ZONING_ALLOW_MEMORY_STORE", "0") == "1",
        memory_geojson_path=_env_str("ZONING_MEMORY_GEOJSON") or None,
        cors_allow_origins=origins or ["*"],
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
