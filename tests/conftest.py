"""
Shared fixtures for the trip planner tests.
"""

import pytest

from src.data_processing.charging_station_api import StationSearchResult
from src.models.trip_types import (
    ChargingNetwork, ChargingStation, LatLng, Location, RouteGeometry, RouteLegGeometry, RouteStep
)
from src.utils.logger import setup_logger

METERS_PER_MILE = 1609.344


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    setup_logger(log_level="CRITICAL", enable_console=False, enable_file=False)


@pytest.fixture
def make_station():
    def _make(station_id, lat=37.0, lng=-120.0, power_kw=150, distance=None,
              network=ChargingNetwork.ELECTRIFY_AMERICA, available=True, name=None):
        name = name or f"Station {station_id}"
        return ChargingStation(
            id=station_id,
            name=name,
            location=Location(name=name, address=f"{station_id} Main St", lat=lat, lng=lng),
            network=network,
            power_kw=power_kw,
            connector_types=["CCS"],
            available=available,
            distance=distance,
        )
    return _make


@pytest.fixture
def make_leg():
    def _make(start, end, miles, minutes=None, steps=0, start_address=None, end_address=None):
        minutes = miles if minutes is None else minutes
        start_ll = LatLng(*start)
        end_ll = LatLng(*end)
        step_list = []
        for i in range(steps):
            frac_a = i / steps
            frac_b = (i + 1) / steps
            step_list.append(RouteStep(
                distance=miles * METERS_PER_MILE / steps,
                duration=minutes * 60 / steps,
                start_location=LatLng(start[0] + (end[0] - start[0]) * frac_a,
                                      start[1] + (end[1] - start[1]) * frac_a),
                end_location=LatLng(start[0] + (end[0] - start[0]) * frac_b,
                                    start[1] + (end[1] - start[1]) * frac_b),
            ))
        return RouteLegGeometry(
            start_address=start_address or f"{start[0]},{start[1]}",
            end_address=end_address or f"{end[0]},{end[1]}",
            distance=miles * METERS_PER_MILE,
            duration=minutes * 60,
            start_location=start_ll,
            end_location=end_ll,
            steps=step_list,
        )
    return _make


@pytest.fixture
def two_leg_route(make_leg):
    """150 miles in two equal legs, Fresno-ish heading north"""
    return RouteGeometry(legs=[
        make_leg((36.0, -120.0), (37.0, -120.0), 75, minutes=75, steps=4,
                 start_address="Origin", end_address="Midpoint"),
        make_leg((37.0, -120.0), (38.0, -120.0), 75, minutes=75, steps=4,
                 start_address="Midpoint", end_address="Destination"),
    ])


class FakeDirectory:
    """Station directory returning canned stations per call, recording queries"""

    def __init__(self, responses=None, default=None):
        self.responses = dict(responses or {})
        self.default = default
        self.calls = []

    def find_stations(self, latitude, longitude, radius_miles=25, max_results=20,
                      min_power_kw=None, networks=None, operational_only=True):
        self.calls.append({
            'latitude': latitude, 'longitude': longitude, 'radius_miles': radius_miles,
            'max_results': max_results, 'min_power_kw': min_power_kw, 'networks': networks,
        })
        key = (latitude, longitude)
        if key in self.responses:
            return self.responses[key]
        if self.default is not None:
            return self.default
        return StationSearchResult()


class FakeDirections:
    def __init__(self, route=None, error=None):
        self.route = route
        self.error = error
        self.calls = []

    def get_route(self, origin, destination, waypoints=()):
        self.calls.append((origin, destination, list(waypoints)))
        if self.error is not None:
            raise self.error
        return self.route


@pytest.fixture
def fake_directory():
    return FakeDirectory


@pytest.fixture
def fake_directions():
    return FakeDirections
