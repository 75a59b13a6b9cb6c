"""
Command-line trip planning.

Example:
    ev-trip-plan --origin "San Francisco, CA" --destination "Los Angeles, CA" \
        --range 250 --battery 90 --network "Electrify America"
"""

import argparse
import sys
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from config.logging_config import get_logging_config
from src.data_processing.charging_station_api import get_station_directory
from src.models.trip_types import ChargingNetwork, EVRouteParams, Location
from src.planning.ev_route_planner import EVRoutePlanner
from src.planning.itinerary_export import export_itinerary
from src.routing.directions_client import GoogleDirectionsClient, TripPlannerError
from src.utils.config_service import merged_runtime_config
from src.utils.logger import print_summary, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan an EV road trip with charging stops")
    parser.add_argument('--origin', required=True, help='Origin address')
    parser.add_argument('--destination', required=True, help='Destination address')
    parser.add_argument('--waypoint', action='append', default=[], help='Pass-through waypoint (repeatable)')
    parser.add_argument('--range', type=float, required=True, dest='vehicle_range',
                        help='Vehicle range on a full charge, miles')
    parser.add_argument('--battery', type=float, required=True, help='Current battery percent')
    parser.add_argument('--min-battery', type=float, default=None)
    parser.add_argument('--max-battery', type=float, default=None)
    parser.add_argument('--network', action='append', default=None,
                        choices=[n.value for n in ChargingNetwork], help='Preferred network (repeatable)')
    parser.add_argument('--provider', choices=['openchargemap', 'nrel'], default=None,
                        help='Charging station directory')
    parser.add_argument('--config', type=str, default=None, help='YAML overrides file')
    parser.add_argument('--output-dir', type=str, default=None, help='Write itinerary CSVs here')
    parser.add_argument('--log-mode', type=str, default='PRODUCTION',
                        choices=['PRODUCTION', 'DEVELOPMENT', 'DEBUG', 'SILENT', 'TESTING'])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logger(**get_logging_config(args.log_mode))

    try:
        runtime_config = merged_runtime_config(args.config)
        provider = args.provider or runtime_config['station_provider']
        stations = get_station_directory(
            provider, network_fallback=runtime_config['station_search']['network_fallback']
        )
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid planner configuration: {e}", file=sys.stderr)
        return 2

    try:
        params = EVRouteParams(
            origin=Location(name=args.origin, address=args.origin),
            destination=Location(name=args.destination, address=args.destination),
            waypoints=[Location(name=wp, address=wp) for wp in args.waypoint],
            vehicle_range=args.vehicle_range,
            current_battery=args.battery,
            min_battery=args.min_battery,
            max_battery=args.max_battery,
            preferred_networks=[ChargingNetwork(n) for n in args.network] if args.network else None,
        )
    except ValueError as e:
        print(f"Invalid trip parameters: {e}", file=sys.stderr)
        return 2

    planner = EVRoutePlanner(GoogleDirectionsClient(), stations, runtime_config=runtime_config)

    try:
        result = planner.plan_route(params)
    except TripPlannerError as e:
        print(f"Route planning failed: {e}", file=sys.stderr)
        return 1

    print_summary("EV TRIP PLAN", {
        'Total distance (mi)': result.total_distance,
        'Driving time (min)': result.driving_duration,
        'Charging time (min)': result.charging_duration,
        'Total time (min)': result.total_duration,
        'Charging stops': len(result.charging_stops),
        'Stations along route': len(result.available_stations),
    })
    for i, stop in enumerate(result.charging_stops, 1):
        print(f"  Stop {i}: {stop.station.name} ({stop.station.network.value}, {stop.station.power_kw:g} kW) "
              f"{stop.arrival_battery}% -> {stop.departure_battery:g}% in {stop.charge_time} min")
    for message in result.warnings:
        print(f"  WARNING: {message}")

    if args.output_dir:
        for name, path in export_itinerary(result, args.output_dir).items():
            print(f"  Exported {name}: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
