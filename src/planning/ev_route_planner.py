"""
EV route planner: route geometry + charger search + drive simulation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from src.data_processing.charging_station_api import BaseStationClient
from src.data_processing.route_station_search import find_chargers_along_route
from src.models.trip_types import EVRouteParams, EVRouteResult
from src.planning.drive_simulator import simulate_drive
from src.routing.directions_client import (
    GoogleDirectionsClient, RouteNotFoundError, extract_route_points
)
from src.utils.config_service import merged_runtime_config
from src.utils.logger import info, log_route_failure


class EVRoutePlanner:
    """
    Plans one feasible itinerary of driving and charging legs.

    The route provider is a hard dependency: if it fails the whole plan fails.
    The station directory is soft: failed lookups only shrink the station pool.
    """

    def __init__(self, directions: GoogleDirectionsClient, stations: BaseStationClient,
                 runtime_config: Optional[Dict[str, Any]] = None):
        self.directions = directions
        self.stations = stations
        config = runtime_config or merged_runtime_config()
        self.planner_config = config['planner']
        self.search_config = config['station_search']

    def plan_route(self, params: EVRouteParams) -> EVRouteResult:
        """
        Calculate an EV route with charging stops.

        Raises:
            RouteNotFoundError: no route between origin and destination
        """
        try:
            route = self.directions.get_route(params.origin, params.destination, params.waypoints)
        except RouteNotFoundError as e:
            log_route_failure(params.origin.query_string(), params.destination.query_string(),
                              str(e), waypoints=[wp.query_string() for wp in params.waypoints])
            raise

        route_points = extract_route_points(
            route.legs, max_points_per_leg=self.search_config['max_route_points_per_leg']
        )

        available_stations = find_chargers_along_route(
            self.stations,
            route_points,
            search_radius_miles=self.search_config['route_search_radius_miles'],
            min_power_kw=self.search_config['route_min_power_kw'],
            networks=params.preferred_networks,
            max_search_points=self.search_config['max_search_points'],
            max_results_per_point=self.search_config['max_results_per_point'],
        )

        simulation = simulate_drive(
            route_legs=route.legs,
            vehicle_range=params.vehicle_range,
            current_battery=params.current_battery,
            min_battery=params.min_battery,
            max_battery=params.max_battery,
            available_stations=available_stations,
            safety_buffer=self.planner_config['safety_buffer'],
            city_efficiency_factor=self.planner_config['city_efficiency_factor'],
        )

        driving_duration = sum(leg.duration for leg in simulation.legs if leg.type == 'driving')
        charging_duration = sum(stop.charge_time for stop in simulation.charging_stops)

        info(f"Planned {route.distance_miles:.1f} mile trip with "
             f"{len(simulation.charging_stops)} charging stops "
             f"({charging_duration} min charging)", module='ev_route_planner')

        return EVRouteResult(
            total_distance=route.distance_miles,
            total_duration=driving_duration + charging_duration,
            driving_duration=driving_duration,
            charging_duration=charging_duration,
            charging_stops=simulation.charging_stops,
            available_stations=available_stations,
            legs=simulation.legs,
            warnings=simulation.warnings,
        )


def calculate_ev_route(params: EVRouteParams, directions: GoogleDirectionsClient,
                       stations: BaseStationClient,
                       runtime_config: Optional[Dict[str, Any]] = None) -> EVRouteResult:
    """Convenience wrapper around EVRoutePlanner.plan_route"""
    return EVRoutePlanner(directions, stations, runtime_config).plan_route(params)
