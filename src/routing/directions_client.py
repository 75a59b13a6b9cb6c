"""
Route geometry provider.

Fetches driving directions from the Google Directions REST API and converts
them into RouteGeometry. Also extracts the sample points used for charger
searches along the route.
"""

import os
from typing import Dict, List, Optional, Sequence

import requests
from dotenv import load_dotenv

from config.trip_planner_config import API_CONFIG, STATION_SEARCH_CONFIG
from src.models.trip_types import LatLng, Location, RouteGeometry, RouteLegGeometry, RouteStep
from src.utils.logger import get_logger

logger = get_logger('directions_client')
load_dotenv()


class TripPlannerError(Exception):
    """Base error for the trip planner"""


class RouteNotFoundError(TripPlannerError):
    """No route geometry could be obtained, planning cannot continue"""


def _lat_lng(raw: Optional[Dict]) -> LatLng:
    raw = raw or {}
    return LatLng(lat=float(raw.get('lat') or 0), lng=float(raw.get('lng') or 0))


def _value(raw: Optional[Dict]) -> float:
    return float((raw or {}).get('value') or 0)


def _parse_legs(raw_legs: List[Dict]) -> List[RouteLegGeometry]:
    legs = []
    for raw_leg in raw_legs:
        steps = [
            RouteStep(
                distance=_value(raw_step.get('distance')),
                duration=_value(raw_step.get('duration')),
                start_location=_lat_lng(raw_step.get('start_location')),
                end_location=_lat_lng(raw_step.get('end_location')),
            )
            for raw_step in raw_leg.get('steps') or []
        ]
        legs.append(RouteLegGeometry(
            start_address=raw_leg.get('start_address') or '',
            end_address=raw_leg.get('end_address') or '',
            distance=_value(raw_leg.get('distance')),
            duration=_value(raw_leg.get('duration')),
            start_location=_lat_lng(raw_leg.get('start_location')),
            end_location=_lat_lng(raw_leg.get('end_location')),
            steps=steps,
        ))
    return legs


def parse_directions_response(data: Dict) -> RouteGeometry:
    """Convert a Directions API JSON body into RouteGeometry (first route only)"""
    if not isinstance(data, dict):
        raise RouteNotFoundError(f"Unable to calculate route: unexpected response {type(data).__name__}")

    status = data.get('status', 'UNKNOWN_ERROR')
    routes = data.get('routes') or []
    if status != 'OK' or not routes:
        message = data.get('error_message') or status
        raise RouteNotFoundError(f"Unable to calculate route: {message}")

    try:
        legs = _parse_legs(routes[0].get('legs') or [])
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise RouteNotFoundError(f"Unable to calculate route: malformed directions response ({e})") from e

    if not legs:
        raise RouteNotFoundError("Unable to calculate route: response contained no legs")
    return RouteGeometry(legs=legs)


class GoogleDirectionsClient:
    """Driving directions from the Google Directions API"""

    def __init__(self, api_key: str = None, session: Optional[requests.Session] = None):
        settings = API_CONFIG['google_directions']
        self.api_key = api_key or os.getenv(settings['api_key_env'])
        self.base_url = settings['base_url']
        self.timeout = settings['timeout_seconds']

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': API_CONFIG['user_agent'],
            'Accept': 'application/json'
        })

    def get_route(self, origin: Location, destination: Location,
                  waypoints: Sequence[Location] = ()) -> RouteGeometry:
        """
        Get a driving route through optional waypoints.

        Waypoints are pass-through points (not stopovers) so each charging stop
        is inserted by the planner, and their order is kept as given.

        Raises:
            RouteNotFoundError: no API key, transport failure or no route
        """
        if not self.api_key:
            raise RouteNotFoundError("Google Maps API key not configured")

        params = {
            'origin': origin.query_string(),
            'destination': destination.query_string(),
            'mode': 'driving',
            'key': self.api_key,
        }
        if waypoints:
            params['waypoints'] = '|'.join(f"via:{wp.query_string()}" for wp in waypoints)

        logger.info(f"Fetching route from '{params['origin']}' to '{params['destination']}' "
                    f"with {len(waypoints)} waypoints")

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise RouteNotFoundError(f"Directions request failed: {e}") from e
        except ValueError as e:
            raise RouteNotFoundError(f"Directions response was not valid JSON: {e}") from e

        route = parse_directions_response(data)
        logger.info(f"Route has {len(route.legs)} legs, {route.distance_miles:.1f} miles")
        return route


def extract_route_points(legs: Sequence[RouteLegGeometry],
                         max_points_per_leg: int = STATION_SEARCH_CONFIG['max_route_points_per_leg']
                         ) -> List[LatLng]:
    """
    Sample points along the route for charger searches.

    Each leg contributes its start point plus the end of every n-th step, with
    n chosen so a leg yields roughly max_points_per_leg step points.
    """
    points: List[LatLng] = []

    for leg in legs:
        points.append(leg.start_location)

        sample_interval = max(1, len(leg.steps) // max_points_per_leg)
        for step in leg.steps[::sample_interval]:
            points.append(step.end_location)

    return points
