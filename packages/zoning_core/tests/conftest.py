import pytest

from packages.zoning_core.projection import CoordinateProjector
from packages.zoning_core.store import InMemoryZoneStore
from packages.zoning_core.tests.zoning_fixtures import build_store


@pytest.fixture(scope="session")
def projector() -> CoordinateProjector:
    return CoordinateProjector()


@pytest.fixture
def zoning_store() -> InMemoryZoneStore:
    return build_store()
