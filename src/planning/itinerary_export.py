import os
from typing import Dict, List

import pandas as pd

from src.models.trip_types import ChargingStation, EVRouteResult


def legs_to_dataframe(result: EVRouteResult) -> pd.DataFrame:
    """One row per itinerary leg, in travel order"""
    rows = [
        {
            'leg_index': i,
            'type': leg.type,
            'from_name': leg.from_location.name,
            'from_lat': leg.from_location.lat,
            'from_lng': leg.from_location.lng,
            'to_name': leg.to_location.name,
            'to_lat': leg.to_location.lat,
            'to_lng': leg.to_location.lng,
            'distance_miles': leg.distance,
            'duration_minutes': leg.duration,
            'battery_used_pct': leg.battery_used,
        }
        for i, leg in enumerate(result.legs)
    ]
    return pd.DataFrame(rows, columns=[
        'leg_index', 'type', 'from_name', 'from_lat', 'from_lng', 'to_name',
        'to_lat', 'to_lng', 'distance_miles', 'duration_minutes', 'battery_used_pct'
    ])


def charging_stops_to_dataframe(result: EVRouteResult) -> pd.DataFrame:
    rows = [
        {
            'station_id': stop.station_id,
            'station_name': stop.station.name,
            'network': stop.station.network.value,
            'power_kw': stop.station.power_kw,
            'arrival_battery_pct': stop.arrival_battery,
            'departure_battery_pct': stop.departure_battery,
            'charge_time_minutes': stop.charge_time,
        }
        for stop in result.charging_stops
    ]
    return pd.DataFrame(rows, columns=[
        'station_id', 'station_name', 'network', 'power_kw',
        'arrival_battery_pct', 'departure_battery_pct', 'charge_time_minutes'
    ])


def stations_to_dataframe(stations: List[ChargingStation]) -> pd.DataFrame:
    rows = [
        {
            'station_id': s.id,
            'name': s.name,
            'address': s.location.address,
            'latitude': s.location.lat,
            'longitude': s.location.lng,
            'network': s.network.value,
            'power_kw': s.power_kw,
            'connector_types': ';'.join(s.connector_types),
            'available': s.available,
            'distance_miles': s.distance,
        }
        for s in stations
    ]
    return pd.DataFrame(rows, columns=[
        'station_id', 'name', 'address', 'latitude', 'longitude', 'network',
        'power_kw', 'connector_types', 'available', 'distance_miles'
    ])


def export_itinerary(result: EVRouteResult, output_dir: str) -> Dict[str, str]:
    """Write legs, charging stops and the station pool as CSV files"""
    os.makedirs(output_dir, exist_ok=True)

    exported_files = {}
    frames = {
        'legs': legs_to_dataframe(result),
        'charging_stops': charging_stops_to_dataframe(result),
        'available_stations': stations_to_dataframe(result.available_stations),
    }
    for name, df in frames.items():
        path = os.path.join(output_dir, f"{name}.csv")
        df.to_csv(path, index=False)
        exported_files[name] = path

    return exported_files
