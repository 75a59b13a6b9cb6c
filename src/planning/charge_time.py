from __future__ import annotations

import math
from typing import Optional

from config.trip_planner_config import EV_ROUTE_CONFIG


def calculate_charge_time(battery_percent_needed: float,
                          charger_power_kw: Optional[float]) -> int:
    """
    Estimate minutes spent at a charger.

    Simplified model: every vehicle is assumed to carry the same average pack
    (EV_ROUTE_CONFIG['average_battery_kwh']) and the charger delivers its rated
    power for the whole session. The result is rounded up to the next minute and
    a fixed setup buffer is added.

    Args:
        battery_percent_needed: Percent of battery to add
        charger_power_kw: Rated charger power, falls back to a Level 2 rate
            when missing or non-positive

    Returns:
        Whole minutes, never less than the setup buffer
    """
    setup_minutes = EV_ROUTE_CONFIG['charge_setup_buffer_minutes']
    if battery_percent_needed is None or battery_percent_needed <= 0:
        return setup_minutes

    if not charger_power_kw or charger_power_kw <= 0:
        charger_power_kw = EV_ROUTE_CONFIG['fallback_charger_power_kw']

    kwh_needed = (battery_percent_needed / 100) * EV_ROUTE_CONFIG['average_battery_kwh']
    hours = kwh_needed / charger_power_kw

    return math.ceil(hours * 60) + setup_minutes
