from __future__ import annotations

from typing import Optional


class ZoningError(Exception):
    """Base error for zoning resolution."""

    code = "ZONING_ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class ConfigurationError(ZoningError):
    """Raised when a required credential or connection string is missing."""

    code = "CONFIGURATION_ERROR"


class InvalidInputError(ZoningError):
    """Raised when caller input is rejected before reaching a collaborator."""

    code = "INVALID_INPUT"


class GeocodingError(ZoningError):
    """Raised when the provider answered but produced no usable result."""

    code = "ADDRESS_NOT_GEOCODABLE"

    def __init__(self, provider_status: str, message: Optional[str] = None) -> None:
        self.provider_status = str(provider_status or "UNKNOWN")
        super().__init__(message or f"address could not be geocoded (status={self.provider_status})")


class TransportError(ZoningError):
    """Raised when an external collaborator cannot be reached."""

    code = "UPSTREAM_UNAVAILABLE"

    def __init__(self, collaborator: str, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message, code="UPSTREAM_TIMEOUT" if timed_out else None)
        self.collaborator = collaborator
        self.timed_out = timed_out
