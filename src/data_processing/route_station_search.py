from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from config.trip_planner_config import STATION_SEARCH_CONFIG
from src.data_processing.charging_station_api import BaseStationClient, StationSearchResult
from src.models.trip_types import ChargingNetwork, ChargingStation, LatLng
from src.utils.logger import get_logger

logger = get_logger('route_station_search')


def select_search_points(route_points: Sequence[LatLng],
                         max_search_points: int = STATION_SEARCH_CONFIG['max_search_points']
                         ) -> List[LatLng]:
    """
    Every n-th route point, with n = len // max_search_points (at least 1).

    The stride is a floor, so up to 2 * max_search_points - 1 points can come
    back (9 points with the default of 5 gives all 9). Concurrency is still
    capped at max_search_points workers.
    """
    search_interval = max(1, len(route_points) // max_search_points)
    return [point for index, point in enumerate(route_points) if index % search_interval == 0]


def merge_unique_stations(results: Sequence[StationSearchResult]) -> List[ChargingStation]:
    """Flatten lookup results, keeping the first station seen for each id"""
    all_stations: List[ChargingStation] = []
    seen_station_ids = set()

    for result in results:
        for station in result.stations:
            if station.id in seen_station_ids:
                continue
            seen_station_ids.add(station.id)
            all_stations.append(station)

    return all_stations


def find_chargers_along_route(directory: BaseStationClient,
                              route_points: Sequence[LatLng],
                              search_radius_miles: float = STATION_SEARCH_CONFIG['default_search_radius_miles'],
                              min_power_kw: Optional[float] = None,
                              networks: Optional[List[ChargingNetwork]] = None,
                              max_search_points: int = STATION_SEARCH_CONFIG['max_search_points'],
                              max_results_per_point: int = STATION_SEARCH_CONFIG['max_results_per_point']
                              ) -> List[ChargingStation]:
    """
    Find charging stations along a route.

    Searches around a handful of evenly spaced route points instead of a single
    radius around the endpoints, so chargers near the middle of long routes are
    found too. Lookups are independent and run concurrently; results are merged
    in route order once all have finished.

    Args:
        directory: Station directory client
        route_points: Ordered points along the route
        search_radius_miles: Radius around each search point
        min_power_kw: Minimum charger power
        networks: Preferred networks
        max_search_points: Upper bound used to derive the sampling stride
        max_results_per_point: Results requested per lookup

    Returns:
        Stations unique by id, sorted by distance from their search point
    """
    search_points = select_search_points(route_points, max_search_points)
    logger.info(f"Searching at {len(search_points)} of {len(route_points)} points along route")

    if not search_points:
        return []

    def lookup(point: LatLng) -> StationSearchResult:
        try:
            result = directory.find_stations(
                latitude=point.lat,
                longitude=point.lng,
                radius_miles=search_radius_miles,
                max_results=max_results_per_point,
                min_power_kw=min_power_kw,
                networks=networks,
            )
        except Exception as e:
            logger.error(f"Station directory raised during lookup: {e}")
            result = StationSearchResult.failure(str(e))
        if not result.ok:
            logger.warning(f"Station lookup at ({point.lat:.4f}, {point.lng:.4f}) "
                           f"degraded to empty: {result.error}")
        else:
            logger.debug(f"Found {len(result.stations)} stations at ({point.lat}, {point.lng})")
        return result

    # map() yields in submission order, which keeps first-occurrence dedup deterministic
    with ThreadPoolExecutor(max_workers=min(max_search_points, len(search_points))) as executor:
        results = list(executor.map(lookup, search_points))

    all_stations = merge_unique_stations(results)
    logger.info(f"Total unique stations found: {len(all_stations)}")

    # Missing distances sort as 0 and land first. Kept for compatibility with the
    # existing itinerary ordering even though it looks accidental.
    return sorted(all_stations, key=lambda s: s.distance or 0)
