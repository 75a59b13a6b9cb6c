"""
Trip planning data model: locations, charging stations, route geometry and
the itinerary produced by the planner.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

from config.trip_planner_config import EV_ROUTE_CONFIG


class ChargingNetwork(str, Enum):
    TESLA_SUPERCHARGER = "Tesla Supercharger"
    ELECTRIFY_AMERICA = "Electrify America"
    CHARGEPOINT = "ChargePoint"
    EVGO = "EVgo"
    BLINK = "Blink"
    OTHER = "Other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "ChargingNetwork":
        """Look up a network by its display name, unknown names map to Other."""
        for network in cls:
            if network.value == name:
                return network
        return cls.OTHER


@dataclass
class LatLng:
    lat: float
    lng: float


@dataclass
class Location:
    """A named place. Coordinates may be missing before geocoding."""
    name: str
    address: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    def query_string(self) -> str:
        """Address if known, otherwise "lat,lng" for the routing provider."""
        if self.address:
            return self.address
        if self.has_coordinates:
            return f"{self.lat},{self.lng}"
        return self.name


@dataclass
class ChargingStation:
    id: str
    name: str
    location: Location
    network: ChargingNetwork = ChargingNetwork.OTHER
    power_kw: float = 0.0
    connector_types: List[str] = field(default_factory=list)
    available: bool = True
    distance: Optional[float] = None  # miles from the query point


@dataclass
class RouteStep:
    distance: float  # meters
    duration: float  # seconds
    start_location: LatLng
    end_location: LatLng


@dataclass
class RouteLegGeometry:
    """One leg as returned by the routing provider, in provider units."""
    start_address: str
    end_address: str
    distance: float  # meters
    duration: float  # seconds
    start_location: LatLng
    end_location: LatLng
    steps: List[RouteStep] = field(default_factory=list)


@dataclass
class RouteGeometry:
    legs: List[RouteLegGeometry]

    @property
    def distance_miles(self) -> float:
        return sum(leg.distance for leg in self.legs) / EV_ROUTE_CONFIG['meters_per_mile']

    @property
    def duration_minutes(self) -> float:
        return sum(leg.duration for leg in self.legs) / EV_ROUTE_CONFIG['seconds_per_minute']


@dataclass
class ChargingStop:
    station_id: str
    station: ChargingStation
    arrival_battery: int
    departure_battery: float
    charge_time: int  # minutes


@dataclass
class ItineraryLeg:
    type: str  # 'driving' | 'charging'
    from_location: Location
    to_location: Location
    distance: float  # miles
    duration: float  # minutes
    battery_used: int  # percent


@dataclass
class EVRouteParams:
    origin: Location
    destination: Location
    vehicle_range: float  # miles per full charge
    current_battery: float  # percent
    waypoints: List[Location] = field(default_factory=list)
    min_battery: Optional[float] = None
    max_battery: Optional[float] = None
    preferred_networks: Optional[List[ChargingNetwork]] = None

    def __post_init__(self):
        if self.min_battery is None:
            self.min_battery = EV_ROUTE_CONFIG['default_min_battery']
        if self.max_battery is None:
            self.max_battery = EV_ROUTE_CONFIG['default_max_battery']

        if self.vehicle_range is None or self.vehicle_range <= 0:
            raise ValueError(f"vehicle_range must be positive, got {self.vehicle_range}")
        for label, value in (('current_battery', self.current_battery),
                             ('min_battery', self.min_battery),
                             ('max_battery', self.max_battery)):
            if not 0 <= value <= 100:
                raise ValueError(f"{label} must be within [0, 100], got {value}")
        if self.min_battery >= self.max_battery:
            raise ValueError(
                f"min_battery ({self.min_battery}) must be below max_battery ({self.max_battery})"
            )


@dataclass
class EVRouteResult:
    total_distance: float  # miles
    total_duration: float  # minutes, driving + charging
    driving_duration: float
    charging_duration: float
    charging_stops: List[ChargingStop]
    available_stations: List[ChargingStation]
    legs: List[ItineraryLeg]
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Enums serialise to their display names
        for station in data['available_stations']:
            station['network'] = ChargingNetwork(station['network']).value
        for stop in data['charging_stops']:
            stop['station']['network'] = ChargingNetwork(stop['station']['network']).value
        return data
