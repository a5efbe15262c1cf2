import pytest

from packages.zoning_core.projection import STORE_SRID, CoordinateProjector
from packages.zoning_core.tests.zoning_fixtures import PAULISTA
from packages.zoning_core.types import ProjectedPoint


def test_store_srid_is_sirgas2000_utm23s() -> None:
    assert STORE_SRID == 31983


def test_to_store_stamps_target_srid(projector: CoordinateProjector) -> None:
    point = projector.to_store(PAULISTA)
    assert point.srid == STORE_SRID


def test_paulista_projects_into_expected_grid_cell(projector: CoordinateProjector) -> None:
    point = projector.to_store(PAULISTA)
    # Easting west of the 45W central meridian, northing on the southern false origin.
    assert 329500 < point.x < 332500
    assert 7391860 < point.y < 7394860


def test_native_to_wgs84_and_back_is_stable(projector: CoordinateProjector) -> None:
    native = ProjectedPoint(x=331200.0, y=7393100.0, srid=STORE_SRID)
    back = projector.to_store(projector.to_wgs84(native))
    assert back.x == pytest.approx(native.x, abs=0.01)
    assert back.y == pytest.approx(native.y, abs=0.01)


def test_to_wgs84_rejects_foreign_srid(projector: CoordinateProjector) -> None:
    with pytest.raises(ValueError):
        projector.to_wgs84(ProjectedPoint(x=331200.0, y=7393100.0, srid=31982))


def test_other_grid_yields_different_point() -> None:
    utm22 = CoordinateProjector(target_srid=31982)
    utm23 = CoordinateProjector()
    a = utm22.to_store(PAULISTA)
    b = utm23.to_store(PAULISTA)
    assert a.srid == 31982
    assert abs(a.x - b.x) > 100000
