"""
Trip planner configuration
Battery policy, station search and external API settings for the EV trip planner
"""

# =============================================================================
# BATTERY / DRIVE SIMULATION
# =============================================================================

EV_ROUTE_CONFIG = {
    'default_min_battery': 20,       # Don't let battery drop below 20%
    'default_max_battery': 80,       # Charge to 80% for optimal speed
    'safety_buffer': 5,              # Extra percentage on top of min battery
    'city_efficiency_factor': 1.1,   # Real driving uses ~10% more than EPA rating

    # Charge time model
    'average_battery_kwh': 75,       # Same average pack assumed for every vehicle
    'charge_setup_buffer_minutes': 5,
    'fallback_charger_power_kw': 11, # Typical Level 2, used when power is unknown

    # Unit conversions
    'meters_per_mile': 1609.344,
    'seconds_per_minute': 60,
}

# =============================================================================
# STATION SEARCH
# =============================================================================

STATION_SEARCH_CONFIG = {
    # Planner search along the route
    'route_search_radius_miles': 25,  # Wide radius to find more fast chargers
    'route_min_power_kw': 50,         # Fast chargers only for road trips

    # Aggregator
    'default_search_radius_miles': 10,
    'max_search_points': 5,
    'max_results_per_point': 10,
    'max_route_points_per_leg': 10,

    # Single directory lookup defaults
    'default_radius_miles': 25,
    'default_max_results': 20,
    'network_fallback': True,
}

# =============================================================================
# EXTERNAL APIS
# =============================================================================

API_CONFIG = {
    'openchargemap': {
        'base_url': 'https://api.openchargemap.io/v3',
        'api_key_env': 'OPENCHARGEMAP_API_KEY',
        'timeout_seconds': 15,
        'rate_limit_seconds': 0.0,
    },
    'nrel': {
        'base_url': 'https://developer.nrel.gov/api/alt-fuel-stations/v1',
        'api_key_env': 'NREL_API_KEY',
        'default_api_key': 'DEMO_KEY',
        'timeout_seconds': 15,
        'rate_limit_seconds': 0.0,
    },
    'google_directions': {
        'base_url': 'https://maps.googleapis.com/maps/api/directions/json',
        'api_key_env': 'GOOGLE_MAPS_API_KEY',
        'timeout_seconds': 10,
    },
    'user_agent': 'EV-Trip-Planner/1.0',
}

# =============================================================================
# CHARGING NETWORKS
# =============================================================================

# Open Charge Map operator IDs for the networks we recognise
OCM_OPERATOR_NETWORKS = {
    2: 'ChargePoint',
    3: 'Blink',
    23: 'Tesla Supercharger',
    25: 'Electrify America',
    35: 'EVgo',
}

# Lower-case substrings checked in order against operator titles and station names
NETWORK_KEYWORDS = [
    ('tesla', 'Tesla Supercharger'),
    ('supercharger', 'Tesla Supercharger'),
    ('electrify', 'Electrify America'),
    ('chargepoint', 'ChargePoint'),
    ('evgo', 'EVgo'),
    ('blink', 'Blink'),
]

# NREL power estimates (kW), the API does not report rated power
NREL_POWER_ESTIMATES = {
    'electrify_dc_fast': 350,
    'tesla_dc_fast': 250,
    'dc_fast': 150,
    'level2': 11,
    'unknown': 50,
}

__all__ = [
    'EV_ROUTE_CONFIG',
    'STATION_SEARCH_CONFIG',
    'API_CONFIG',
    'OCM_OPERATOR_NETWORKS',
    'NETWORK_KEYWORDS',
    'NREL_POWER_ESTIMATES',
]
