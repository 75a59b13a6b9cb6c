"""
Forward drive simulation: walks the route legs in order, tracks battery
percentage and inserts a charging stop whenever the next leg would take the
battery under the safe floor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from config.trip_planner_config import EV_ROUTE_CONFIG
from src.models.trip_types import (
    ChargingStation, ChargingStop, ItineraryLeg, LatLng, Location, RouteLegGeometry
)
from src.planning.charge_time import calculate_charge_time
from src.utils.geo import find_closest_station, haversine_miles
from src.utils.logger import get_logger

logger = get_logger('drive_simulator')


@dataclass
class SimulationResult:
    charging_stops: List[ChargingStop] = field(default_factory=list)
    legs: List[ItineraryLeg] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def simulate_drive(route_legs: Sequence[RouteLegGeometry],
                   vehicle_range: float,
                   current_battery: float,
                   min_battery: float,
                   max_battery: float,
                   available_stations: Sequence[ChargingStation],
                   safety_buffer: float = EV_ROUTE_CONFIG['safety_buffer'],
                   city_efficiency_factor: float = EV_ROUTE_CONFIG['city_efficiency_factor']
                   ) -> SimulationResult:
    """
    Simulate the drive and decide where to charge.

    Single forward pass, no look-ahead: before each leg, if driving it would
    leave less than min_battery + safety_buffer, charge to max_battery at the
    station closest to the current position. A charging detour is modelled as
    happening at the start of the leg; the leg's own geometry is unchanged.

    If no station is available the leg is driven anyway and the shortfall is
    reported in SimulationResult.warnings.

    Args:
        route_legs: Legs from the routing provider (meters / seconds)
        vehicle_range: Miles on a full charge
        current_battery: Starting battery percent
        min_battery: Minimum safe battery percent
        max_battery: Target percent after charging
        available_stations: Candidate station pool
        safety_buffer: Extra percent kept above min_battery
        city_efficiency_factor: Consumption multiplier over the rated range

    Returns:
        SimulationResult with charging stops and alternating itinerary legs
    """
    result = SimulationResult()
    if not route_legs:
        return result

    meters_per_mile = EV_ROUTE_CONFIG['meters_per_mile']
    seconds_per_minute = EV_ROUTE_CONFIG['seconds_per_minute']
    battery_per_mile = 100 / vehicle_range
    battery_floor = min_battery + safety_buffer

    battery = current_battery
    current_location: LatLng = route_legs[0].start_location

    for index, route_leg in enumerate(route_legs):
        leg_miles = route_leg.distance / meters_per_mile
        leg_minutes = route_leg.duration / seconds_per_minute
        battery_needed = leg_miles * battery_per_mile * city_efficiency_factor

        if battery - battery_needed < battery_floor:
            station = find_closest_station(current_location, available_stations)

            if station is None:
                message = (f"Leg {index + 1} ({route_leg.start_address} -> {route_leg.end_address}) "
                           f"needs a charge at {battery:.1f}% but no charging station is available")
                logger.warning(message)
                result.warnings.append(message)
            else:
                charge_needed = max_battery - battery
                charge_time = calculate_charge_time(charge_needed, station.power_kw)

                result.charging_stops.append(ChargingStop(
                    station_id=station.id,
                    station=station,
                    arrival_battery=_round_half_up(battery),
                    departure_battery=max_battery,
                    charge_time=charge_time,
                ))

                result.legs.append(ItineraryLeg(
                    type='charging',
                    from_location=Location(
                        name='Current location',
                        address='',
                        lat=current_location.lat,
                        lng=current_location.lng,
                    ),
                    to_location=station.location,
                    distance=haversine_miles(current_location, station.location),
                    duration=charge_time,
                    battery_used=0,
                ))

                logger.debug(f"Charging at {station.name} before leg {index + 1}: "
                             f"{battery:.1f}% -> {max_battery}% in {charge_time} min")

                battery = max_battery
                current_location = LatLng(lat=station.location.lat, lng=station.location.lng)

        result.legs.append(ItineraryLeg(
            type='driving',
            from_location=Location(
                name=route_leg.start_address,
                address=route_leg.start_address,
                lat=route_leg.start_location.lat,
                lng=route_leg.start_location.lng,
            ),
            to_location=Location(
                name=route_leg.end_address,
                address=route_leg.end_address,
                lat=route_leg.end_location.lat,
                lng=route_leg.end_location.lng,
            ),
            distance=leg_miles,
            duration=leg_minutes,
            battery_used=_round_half_up(battery_needed),
        ))

        battery -= battery_needed
        current_location = route_leg.end_location

    return result
