"""
Geographic helpers for trip planning.

All distances are great-circle distances in miles using the haversine formula.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple, Union

from src.models.trip_types import ChargingStation, LatLng, Location

EARTH_RADIUS_MILES = 3959.0

Point = Union[LatLng, Location, Tuple[float, float]]


def _lat_lng(point: Point) -> Tuple[float, float]:
    if isinstance(point, tuple):
        return float(point[0]), float(point[1])
    return float(point.lat), float(point.lng)


def haversine_miles(point_a: Point, point_b: Point) -> float:
    """
    Great-circle distance in miles between two points.

    Args:
        point_a: LatLng, Location with coordinates, or (lat, lng) tuple
        point_b: same as point_a

    Returns:
        Distance in miles. Crossing the antimeridian takes the short way round.
    """
    lat1, lng1 = _lat_lng(point_a)
    lat2, lng2 = _lat_lng(point_b)

    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (math.sin(dlat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlng / 2) ** 2)
    # Rounding can push a a hair above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def find_closest_station(point: Point,
                         stations: Sequence[ChargingStation]) -> Optional[ChargingStation]:
    """
    Find the station nearest to a point.

    Stations without coordinates are skipped. On equal distances the station
    listed first wins. Returns None when nothing usable is found.
    """
    closest = None
    min_distance = math.inf

    for station in stations:
        if not station.location.has_coordinates:
            continue

        distance = haversine_miles(point, station.location)
        if distance < min_distance:
            min_distance = distance
            closest = station

    return closest
