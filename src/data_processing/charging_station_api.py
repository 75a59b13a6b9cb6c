import os
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import requests
from dotenv import load_dotenv

from config.trip_planner_config import (
    API_CONFIG, STATION_SEARCH_CONFIG, OCM_OPERATOR_NETWORKS,
    NETWORK_KEYWORDS, NREL_POWER_ESTIMATES
)
from src.models.trip_types import ChargingNetwork, ChargingStation, Location
from src.utils.logger import get_logger

logger = get_logger('charging_station_api')
load_dotenv()


@dataclass
class StationSearchResult:
    """Outcome of one directory lookup. Failures carry a reason and no stations."""
    stations: List[ChargingStation] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, reason: str) -> "StationSearchResult":
        return cls(stations=[], error=reason)


def network_from_text(*texts: Optional[str]) -> ChargingNetwork:
    """Match operator titles / station names against known network keywords"""
    for text in texts:
        if not text:
            continue
        lowered = text.lower()
        for keyword, network_name in NETWORK_KEYWORDS:
            if keyword in lowered:
                return ChargingNetwork(network_name)
    return ChargingNetwork.OTHER


def filter_stations(stations: List[ChargingStation],
                    min_power_kw: Optional[float] = None,
                    networks: Optional[Iterable[ChargingNetwork]] = None,
                    operational_only: bool = True,
                    network_fallback: bool = True) -> List[ChargingStation]:
    """
    Apply min power, operational and network filters.

    When the network allow-list removes every station, the user's preferred
    networks may just not exist in this area: fall back to operational stations
    from any network, then to everything.
    """
    if min_power_kw:
        stations = [s for s in stations if s.power_kw >= min_power_kw]

    allowed = set(ChargingNetwork(n) for n in networks) if networks else None

    filtered = [
        s for s in stations
        if (not operational_only or s.available)
        and (allowed is None or s.network in allowed)
    ]

    if allowed and not filtered and stations and network_fallback:
        logger.info("No stations match preferred networks. Trying all networks...")
        all_operational = [s for s in stations if s.available]
        if all_operational:
            return all_operational
        logger.info(f"No operational stations found. Returning all {len(stations)} stations")
        return list(stations)

    return filtered


class BaseStationClient:
    """Shared session, rate limiting and error handling for station directories"""

    source_name = "station directory"

    def __init__(self, api_key: Optional[str], api_settings: Dict,
                 session: Optional[requests.Session] = None,
                 network_fallback: Optional[bool] = None):
        self.api_key = api_key
        self.base_url = api_settings['base_url']
        self.timeout = api_settings['timeout_seconds']
        self.network_fallback = (STATION_SEARCH_CONFIG['network_fallback']
                                 if network_fallback is None else network_fallback)

        # Sessions are not shared across aggregator worker threads unless injected
        self._injected_session = session
        self._thread_local = threading.local()
        if session is not None:
            self._prepare_session(session)

        # Rate limiting
        self.last_request_time = 0.0
        self.min_request_interval = api_settings.get('rate_limit_seconds', 0.0)
        self._rate_lock = threading.Lock()

    @staticmethod
    def _prepare_session(session: requests.Session):
        session.headers.update({
            'User-Agent': API_CONFIG['user_agent'],
            'Accept': 'application/json'
        })

    @property
    def session(self) -> requests.Session:
        """The injected session, otherwise one session per calling thread"""
        if self._injected_session is not None:
            return self._injected_session
        session = getattr(self._thread_local, 'session', None)
        if session is None:
            session = requests.Session()
            self._prepare_session(session)
            self._thread_local.session = session
        return session

    def _rate_limit(self):
        """Implement rate limiting for API requests"""
        if self.min_request_interval <= 0:
            return
        with self._rate_lock:
            time_since_last = time.time() - self.last_request_time
            if time_since_last < self.min_request_interval:
                time.sleep(self.min_request_interval - time_since_last)
            self.last_request_time = time.time()

    def _fetch_stations(self, latitude: float, longitude: float, radius_miles: float,
                        max_results: int, min_power_kw: Optional[float]) -> List[ChargingStation]:
        raise NotImplementedError

    def find_stations(self, latitude: float, longitude: float,
                      radius_miles: float = STATION_SEARCH_CONFIG['default_radius_miles'],
                      max_results: int = STATION_SEARCH_CONFIG['default_max_results'],
                      min_power_kw: Optional[float] = None,
                      networks: Optional[List[ChargingNetwork]] = None,
                      operational_only: bool = True) -> StationSearchResult:
        """
        Find charging stations near a location

        Args:
            latitude: Latitude coordinate
            longitude: Longitude coordinate
            radius_miles: Search radius in miles
            max_results: Maximum number of results requested from the API
            min_power_kw: Minimum charging power (e.g. 50 for fast charging)
            networks: Preferred networks
            operational_only: Only keep operational stations

        Returns:
            StationSearchResult, empty with an error reason if the lookup failed
        """
        self._rate_limit()

        try:
            stations = self._fetch_stations(latitude, longitude, radius_miles,
                                            max_results, min_power_kw)
        except requests.exceptions.RequestException as e:
            logger.error(f"{self.source_name} request failed: {e}")
            return StationSearchResult.failure(f"request failed: {e}")
        except ValueError as e:
            logger.error(f"{self.source_name} returned invalid JSON: {e}")
            return StationSearchResult.failure(f"invalid response: {e}")
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Error extracting station data from {self.source_name}: {e}")
            return StationSearchResult.failure(f"unexpected schema: {e}")

        operational_count = sum(1 for s in stations if s.available)
        logger.debug(f"Received {len(stations)} stations ({operational_count} operational) "
                     f"near ({latitude:.3f}, {longitude:.3f})")

        filtered = filter_stations(stations, min_power_kw=min_power_kw, networks=networks,
                                   operational_only=operational_only,
                                   network_fallback=self.network_fallback)
        return StationSearchResult(stations=filtered)

    def _get_json(self, url: str, params: Dict):
        response = self.session.get(url, params=params, timeout=self.timeout)
        if response.status_code != 200:
            raise requests.exceptions.HTTPError(
                f"API Error {response.status_code}: {response.text[:200]}", response=response
            )
        return response.json()


class OpenChargeMapClient(BaseStationClient):
    """Station directory backed by the Open Charge Map POI API"""

    source_name = "OpenChargeMap"

    def __init__(self, api_key: str = None, session: Optional[requests.Session] = None,
                 network_fallback: Optional[bool] = None):
        settings = API_CONFIG['openchargemap']
        super().__init__(api_key or os.getenv(settings['api_key_env']), settings,
                         session=session, network_fallback=network_fallback)

    def _fetch_stations(self, latitude, longitude, radius_miles, max_results, min_power_kw):
        params = {
            'output': 'json',
            'latitude': latitude,
            'longitude': longitude,
            'distance': radius_miles,
            'distanceunit': 'Miles',
            'maxresults': max_results,
            'compact': 'true',
            'verbose': 'false',
        }
        if min_power_kw:
            params['minpowerkw'] = min_power_kw
        if self.api_key:
            params['key'] = self.api_key

        raw_stations = self._get_json(f"{self.base_url}/poi/", params)
        logger.info(f"Found {len(raw_stations)} stations near ({latitude}, {longitude})")
        return [self.extract_station_data(raw) for raw in raw_stations]

    def extract_station_data(self, raw_station: Dict) -> ChargingStation:
        """
        Convert a raw Open Charge Map POI into a ChargingStation

        Args:
            raw_station: Raw station data from API

        Returns:
            Standardized station
        """
        address_info = raw_station.get('AddressInfo') or {}
        operator_info = raw_station.get('OperatorInfo') or {}
        status_type = raw_station.get('StatusType') or {}
        connections = raw_station.get('Connections') or []

        name = address_info.get('Title') or raw_station.get('Title') or 'Unnamed Station'
        charging_info = self._process_connections(connections)

        return ChargingStation(
            id=f"ocm-{raw_station['ID']}",
            name=name,
            location=Location(
                name=name,
                address=self._format_address(address_info),
                lat=address_info.get('Latitude'),
                lng=address_info.get('Longitude'),
            ),
            network=self._map_network(operator_info.get('ID'),
                                      operator_info.get('Title'), name),
            power_kw=charging_info['max_power_kw'],
            connector_types=charging_info['connector_types'],
            available=bool(status_type.get('IsOperational', False)),
            distance=address_info.get('Distance'),
        )

    def _process_connections(self, connections: List[Dict]) -> Dict:
        """Process connection data to extract charging capabilities"""
        power_ratings = []
        connector_types = []

        for conn in connections:
            power_kw = conn.get('PowerKW') or 0
            if power_kw > 0:
                power_ratings.append(power_kw)

            connection_type = conn.get('ConnectionType') or {}
            connector_title = connection_type.get('Title')
            if not connector_title and conn.get('ConnectionTypeID') is not None:
                connector_title = f"Type {conn['ConnectionTypeID']}"
            if connector_title and connector_title not in connector_types:
                connector_types.append(connector_title)

        return {
            'max_power_kw': max(power_ratings) if power_ratings else 0,
            'connector_types': connector_types,
        }

    @staticmethod
    def _format_address(address_info: Dict) -> str:
        parts = [
            address_info.get('AddressLine1'),
            address_info.get('Town'),
            address_info.get('StateOrProvince'),
            address_info.get('Postcode'),
        ]
        return ', '.join(str(p) for p in parts if p)

    @staticmethod
    def _map_network(operator_id: Optional[int], operator_title: Optional[str],
                     station_name: Optional[str]) -> ChargingNetwork:
        if operator_id in OCM_OPERATOR_NETWORKS:
            return ChargingNetwork(OCM_OPERATOR_NETWORKS[operator_id])
        return network_from_text(operator_title, station_name)


class NRELStationClient(BaseStationClient):
    """Station directory backed by the NREL Alternative Fuel Stations API"""

    source_name = "NREL"

    def __init__(self, api_key: str = None, session: Optional[requests.Session] = None,
                 network_fallback: Optional[bool] = None):
        settings = API_CONFIG['nrel']
        api_key = api_key or os.getenv(settings['api_key_env']) or settings['default_api_key']
        super().__init__(api_key, settings, session=session, network_fallback=network_fallback)

    def _fetch_stations(self, latitude, longitude, radius_miles, max_results, min_power_kw):
        # Network filtering stays client side, NREL network ids differ from ours
        params = {
            'api_key': self.api_key,
            'fuel_type': 'ELEC',
            'latitude': latitude,
            'longitude': longitude,
            'radius': radius_miles,
            'limit': max_results,
            'status': 'E',
        }

        data = self._get_json(f"{self.base_url}/nearest.json", params)
        raw_stations = data.get('fuel_stations') or []
        logger.info(f"Found {len(raw_stations)} charging stations from NREL")
        return [self.extract_station_data(raw) for raw in raw_stations]

    def extract_station_data(self, raw_station: Dict) -> ChargingStation:
        name = raw_station.get('station_name') or 'Unnamed Station'
        address = (f"{raw_station.get('street_address', '')}, {raw_station.get('city', '')}, "
                   f"{raw_station.get('state', '')} {raw_station.get('zip', '')}")

        return ChargingStation(
            id=f"nrel-{raw_station['id']}",
            name=name,
            location=Location(
                name=name,
                address=address,
                lat=raw_station.get('latitude'),
                lng=raw_station.get('longitude'),
            ),
            network=network_from_text(raw_station.get('ev_network')),
            power_kw=self.estimate_max_power(raw_station),
            connector_types=list(raw_station.get('ev_connector_types') or []),
            available=raw_station.get('status_code') == 'E',
            distance=raw_station.get('distance'),
        )

    @staticmethod
    def estimate_max_power(raw_station: Dict) -> float:
        """NREL reports charger counts, not power: estimate it from the charger mix"""
        ev_network = raw_station.get('ev_network') or ''

        if (raw_station.get('ev_dc_fast_num') or 0) > 0:
            if 'Electrify' in ev_network:
                return NREL_POWER_ESTIMATES['electrify_dc_fast']
            if 'Tesla' in ev_network:
                return NREL_POWER_ESTIMATES['tesla_dc_fast']
            return NREL_POWER_ESTIMATES['dc_fast']

        if (raw_station.get('ev_level2_evse_num') or 0) > 0:
            return NREL_POWER_ESTIMATES['level2']

        return NREL_POWER_ESTIMATES['unknown']


def get_station_directory(provider: str = "openchargemap", **kwargs) -> BaseStationClient:
    """Build a station directory client by provider name"""
    providers = {
        'openchargemap': OpenChargeMapClient,
        'nrel': NRELStationClient,
    }
    if provider not in providers:
        raise ValueError(f"Unknown station provider '{provider}'. Options: {sorted(providers)}")
    return providers[provider](**kwargs)
