import pytest

from packages.zoning_core.errors import GeocodingError, InvalidInputError, TransportError
from packages.zoning_core.pipeline import ZoningPipeline, validate_coordinate
from packages.zoning_core.resolver import ZoneResolver
from packages.zoning_core.tests.zoning_fixtures import PAULISTA, ZEU
from packages.zoning_core.types import NOT_FOUND_MESSAGE, Coordinate, GeocodeResult

PAULISTA_FORMATTED = "Av. Paulista, 1578 - Bela Vista, São Paulo - SP, 01310-200, Brasil"


class _FakeGeocoder:
    def __init__(self, result=None, error: Exception = None) -> None:
        self.result = result
        self.error = error
        self.addresses = []

    def geocode(self, address: str) -> GeocodeResult:
        self.addresses.append(address)
        if self.error is not None:
            raise self.error
        return self.result


class _CountingStore:
    def __init__(self, inner) -> None:
        self.inner = inner
        self.queries = 0

    def find_zone(self, point):
        self.queries += 1
        return self.inner.find_zone(point)


@pytest.fixture
def counting_store(zoning_store):
    return _CountingStore(zoning_store)


def _pipeline(geocoder, store, projector) -> ZoningPipeline:
    return ZoningPipeline(geocoder, ZoneResolver(store, projector))


def test_resolve_by_address_scenario(counting_store, projector) -> None:
    geocoder = _FakeGeocoder(GeocodeResult(PAULISTA_FORMATTED, PAULISTA))
    resolution = _pipeline(geocoder, counting_store, projector).resolve_by_address("  Av. Paulista, 1578, São Paulo ")

    assert geocoder.addresses == ["Av. Paulista, 1578, São Paulo"]
    assert resolution.formatted_address == PAULISTA_FORMATTED
    assert resolution.coordinate.latitude == pytest.approx(-23.5614)
    assert resolution.coordinate.longitude == pytest.approx(-46.6559)
    assert resolution.zone_result.zone == ZEU
    assert counting_store.queries == 1


@pytest.mark.parametrize("address", ["", "   ", "\n\t", None, 42])
def test_blank_address_is_caller_error(counting_store, projector, address) -> None:
    geocoder = _FakeGeocoder(GeocodeResult(PAULISTA_FORMATTED, PAULISTA))
    with pytest.raises(InvalidInputError):
        _pipeline(geocoder, counting_store, projector).resolve_by_address(address)
    assert geocoder.addresses == []
    assert counting_store.queries == 0


@pytest.mark.parametrize(
    "error",
    [
        GeocodingError("ZERO_RESULTS"),
        TransportError("google_geocoding", "timed out", timed_out=True),
    ],
)
def test_geocoding_failure_never_queries_store(counting_store, projector, error) -> None:
    pipeline = _pipeline(_FakeGeocoder(error=error), counting_store, projector)
    with pytest.raises(type(error)) as excinfo:
        pipeline.resolve_by_address("Rua que não existe, 0")
    assert excinfo.value is error
    assert counting_store.queries == 0


def test_out_of_range_geocoded_coordinate_is_rejected(counting_store, projector) -> None:
    geocoder = _FakeGeocoder(GeocodeResult("bogus", Coordinate(latitude=123.0, longitude=0.0)))
    with pytest.raises(GeocodingError) as excinfo:
        _pipeline(geocoder, counting_store, projector).resolve_by_address("bogus")
    assert excinfo.value.provider_status == "INVALID_COORDINATE"
    assert counting_store.queries == 0


def test_address_outside_coverage_is_success_with_fallback(counting_store, projector) -> None:
    rio = Coordinate(latitude=-22.9068, longitude=-43.1729)
    geocoder = _FakeGeocoder(GeocodeResult("Rio de Janeiro - RJ, Brasil", rio))
    resolution = _pipeline(geocoder, counting_store, projector).resolve_by_address("Rio de Janeiro")
    assert resolution.zone_result.found is False
    assert resolution.zone_result.fallback_message == NOT_FOUND_MESSAGE


def test_resolve_by_coordinate_hits_store_once(counting_store, projector) -> None:
    pipeline = _pipeline(_FakeGeocoder(), counting_store, projector)
    result = pipeline.resolve_by_coordinate(-23.5614, -46.6559)
    assert result.zone_code == "ZEU"
    assert counting_store.queries == 1


@pytest.mark.parametrize(
    "latitude,longitude",
    [(95, -46.6), (-90.01, 0), (0, 180.5), (0, -181), ("-23.5", -46.6), (True, 0), (float("nan"), 0), (None, 0)],
)
def test_invalid_coordinate_rejected_before_resolver(counting_store, projector, latitude, longitude) -> None:
    pipeline = _pipeline(_FakeGeocoder(), counting_store, projector)
    with pytest.raises(InvalidInputError):
        pipeline.resolve_by_coordinate(latitude, longitude)
    assert counting_store.queries == 0


def test_validate_coordinate_accepts_bounds() -> None:
    assert validate_coordinate(90, -180) == Coordinate(latitude=90.0, longitude=-180.0)
    assert validate_coordinate(-90.0, 180.0) == Coordinate(latitude=-90.0, longitude=180.0)
