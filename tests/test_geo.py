import pytest

from src.models.trip_types import LatLng, Location
from src.utils.geo import find_closest_station, haversine_miles


class TestHaversineMiles:

    @pytest.mark.parametrize("a,b", [
        ((37.7749, -122.4194), (34.0522, -118.2437)),
        ((0.0, 0.0), (-33.8688, 151.2093)),
        ((60.0, 179.0), (60.0, -179.0)),
    ])
    def test_symmetric(self, a, b):
        assert haversine_miles(a, b) == pytest.approx(haversine_miles(b, a))

    def test_coincident_points_are_zero(self):
        assert haversine_miles((45.5, -73.6), (45.5, -73.6)) == pytest.approx(0.0, abs=1e-9)

    def test_known_distance_sf_to_la(self):
        # ~347 miles great-circle
        assert haversine_miles((37.7749, -122.4194), (34.0522, -118.2437)) == pytest.approx(347, abs=3)

    def test_antimeridian_takes_short_way(self):
        distance = haversine_miles((60.0, 179.0), (60.0, -179.0))
        assert distance < 200
        assert distance == pytest.approx(69.0, abs=1.0)

    def test_one_degree_latitude(self):
        # 2 * pi * 3959 / 360
        assert haversine_miles((10.0, 5.0), (11.0, 5.0)) == pytest.approx(69.097, abs=0.01)

    def test_accepts_location_and_latlng(self):
        loc = Location(name="A", lat=40.0, lng=-75.0)
        ll = LatLng(41.0, -75.0)
        assert haversine_miles(loc, ll) == pytest.approx(haversine_miles((40.0, -75.0), (41.0, -75.0)))

    def test_antipodal_points(self):
        assert haversine_miles((0.0, 0.0), (0.0, 180.0)) == pytest.approx(3959 * 3.141592653589793)


class TestFindClosestStation:

    def test_empty_list_returns_none(self):
        assert find_closest_station((37.0, -120.0), []) is None

    def test_returns_nearest_of_three(self, make_station):
        stations = [
            make_station("far", lat=38.0, lng=-120.0),
            make_station("near", lat=37.01, lng=-120.0),
            make_station("mid", lat=37.5, lng=-120.0),
        ]
        assert find_closest_station((37.0, -120.0), stations).id == "near"

    def test_skips_stations_without_coordinates(self, make_station):
        stations = [
            make_station("no-coords", lat=None, lng=None),
            make_station("no-lng", lat=37.0, lng=None),
            make_station("valid", lat=39.0, lng=-120.0),
        ]
        assert find_closest_station((37.0, -120.0), stations).id == "valid"

    def test_only_stations_without_coordinates_returns_none(self, make_station):
        stations = [make_station("a", lat=None, lng=None)]
        assert find_closest_station((37.0, -120.0), stations) is None

    def test_tie_goes_to_first_station(self, make_station):
        stations = [
            make_station("first", lat=37.1, lng=-120.0),
            make_station("second", lat=37.1, lng=-120.0),
        ]
        assert find_closest_station((37.0, -120.0), stations).id == "first"

    def test_zero_coordinates_are_usable(self, make_station):
        stations = [
            make_station("equator", lat=0.0, lng=0.0),
            make_station("elsewhere", lat=10.0, lng=10.0),
        ]
        assert find_closest_station((0.1, 0.1), stations).id == "equator"
