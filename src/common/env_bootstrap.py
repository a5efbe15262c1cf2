from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional


def _parse_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not path.exists() or not path.is_file():
        return values
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        value = value.strip().strip("'").strip('"')
        if key:
            values[key] = value
    return values


def default_env_files(root: Optional[Path] = None) -> list[Path]:
    base = root or Path(__file__).resolve().parents[2]
    return [
        base / ".env.local",
        base / ".env",
        base / "config" / "zoning.env",
    ]


def bootstrap_zoning_env(candidates: Optional[Iterable[Path]] = None) -> list[Path]:
    """Load zoning env vars from project-level files without overriding process env."""
    loaded: list[Path] = []
    for env_path in candidates if candidates is not None else default_env_files():
        values = _parse_env_file(env_path)
        if not values:
            continue
        for key, value in values.items():
            os.environ.setdefault(key, value)
        loaded.append(env_path)

    # Legacy deployments exported the connection string under the PG driver names.
    db_url = str(os.getenv("DATABASE_URL") or "").strip()
    if not db_url:
        fallback = str(os.getenv("POSTGRES_URL") or "").strip() or str(os.getenv("PG_DSN") or "").strip()
        if fallback:
            os.environ["DATABASE_URL"] = fallback
    return loaded
