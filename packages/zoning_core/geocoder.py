"""Google Geocoding API adapter."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from packages.zoning_core.errors import ConfigurationError, GeocodingError, TransportError
from packages.zoning_core.settings import DEFAULT_GEOCODER_ENDPOINT, ZoningSettings
from packages.zoning_core.types import Coordinate, GeocodeResult

logger = logging.getLogger(__name__)

OK_STATUS = "OK"
MALFORMED_RESULT_STATUS = "MALFORMED_RESULT"


class GoogleGeocoder:
    """Turns a free-text address into a formatted address and a WGS84 coordinate.

    One outbound GET per call, never retried. Only the first candidate of the
    provider's answer is used.

    Without an injected session every call opens its own short-lived
    ``requests.Session`` mounted on one shared ``HTTPAdapter``; the adapter's
    urllib3 pool is thread-safe and keeps connections alive across calls.
    An injected session is used as-is and must be safe for the caller's
    concurrency.
    """

    api_name = "google_geocoding"

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str = DEFAULT_GEOCODER_ENDPOINT,
        timeout_sec: float = 5.0,
        session: Optional[requests.Session] = None,
        region: Optional[str] = None,
        language: Optional[str] = None,
    ) -> None:
        self.api_key = str(api_key or "").strip()
        self.endpoint = endpoint
        self.timeout_sec = timeout_sec
        self.region = region
        self.language = language
        self._session = session
        self._adapter = HTTPAdapter()

    @classmethod
    def from_settings(cls, settings: ZoningSettings, session: Optional[requests.Session] = None) -> "GoogleGeocoder":
        return cls(
            api_key=settings.google_api_key,
            endpoint=settings.geocoder_endpoint,
            timeout_sec=settings.geocoder_timeout_sec,
            session=session,
            region=settings.geocoder_region,
            language=settings.geocoder_language,
        )

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
        self._adapter.close()

    def _get(self, address: str) -> requests.Response:
        if self._session is not None:
            return self._session.get(self.endpoint, params=self._params(address), timeout=self.timeout_sec)
        # Not closed: Session.close() would also close the shared adapter.
        session = requests.Session()
        session.mount("https://", self._adapter)
        session.mount("http://", self._adapter)
        return session.get(self.endpoint, params=self._params(address), timeout=self.timeout_sec)

    def geocode(self, address: str) -> GeocodeResult:
        if not self.api_key:
            raise ConfigurationError("GOOGLE_API_KEY is not configured; address lookups are unavailable")

        payload = self._request(address)
        status = str(payload.get("status") or "UNKNOWN")
        results = payload.get("results") or []
        if status != OK_STATUS or not results:
            logger.info("geocoder returned no usable result status=%s", status)
            raise GeocodingError(status)

        return self._parse_first(results[0])

    def _params(self, address: str) -> Dict[str, str]:
        params = {"address": address, "key": self.api_key}
        if self.region:
            params["region"] = self.region
        if self.language:
            params["language"] = self.language
        return params

    def _request(self, address: str) -> Dict[str, Any]:
        try:
            response = self._get(address)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as exc:
            logger.warning("geocoder timed out after %ss", self.timeout_sec)
            raise TransportError(self.api_name, "geocoding provider timed out", timed_out=True) from exc
        except requests.RequestException as exc:
            # The exception text may embed the request URL, which carries the key.
            logger.warning("geocoder request failed: %s", exc.__class__.__name__)
            raise TransportError(self.api_name, "geocoding provider unreachable") from exc
        except ValueError as exc:
            logger.warning("geocoder returned a non-JSON body")
            raise TransportError(self.api_name, "geocoding provider returned an invalid response") from exc

        if not isinstance(payload, dict):
            raise TransportError(self.api_name, "geocoding provider returned an invalid response")
        return payload

    @staticmethod
    def _parse_first(result: Dict[str, Any]) -> GeocodeResult:
        try:
            location = result["geometry"]["location"]
            coordinate = Coordinate(latitude=float(location["lat"]), longitude=float(location["lng"]))
            formatted = str(result["formatted_address"])
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(MALFORMED_RESULT_STATUS) from exc
        return GeocodeResult(formatted_address=formatted, coordinate=coordinate)
