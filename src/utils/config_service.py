from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, confloat, conint


PLANNER_OVERRIDES_PATH = Path("config/planner_overrides.yaml")


class PlannerConfigSchema(BaseModel):
    safety_buffer: confloat(ge=0, le=50) = 5
    city_efficiency_factor: confloat(ge=0.5, le=3.0) = 1.1


class StationSearchConfigSchema(BaseModel):
    route_search_radius_miles: confloat(gt=0, le=200) = 25
    route_min_power_kw: Optional[confloat(ge=0, le=1000)] = 50
    max_search_points: conint(ge=1, le=20) = 5
    max_results_per_point: conint(ge=1, le=500) = 10
    max_route_points_per_leg: conint(ge=1, le=100) = 10
    network_fallback: bool = True


class PlannerOverrides(BaseModel):
    planner: PlannerConfigSchema = Field(default_factory=PlannerConfigSchema)
    station_search: StationSearchConfigSchema = Field(default_factory=StationSearchConfigSchema)
    station_provider: Literal["openchargemap", "nrel"] = "openchargemap"


def load_overrides(path: Union[str, Path, None] = None) -> PlannerOverrides:
    path = Path(path) if path else PLANNER_OVERRIDES_PATH
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return PlannerOverrides(**data)
    return PlannerOverrides()


def save_overrides(overrides: PlannerOverrides, path: Union[str, Path, None] = None) -> None:
    path = Path(path) if path else PLANNER_OVERRIDES_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(overrides.model_dump(), sort_keys=False), encoding="utf-8")


def merged_runtime_config(path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Python config defaults with YAML overrides applied on top"""
    from config.trip_planner_config import EV_ROUTE_CONFIG, STATION_SEARCH_CONFIG

    overrides = load_overrides(path)

    planner = {**EV_ROUTE_CONFIG, **overrides.planner.model_dump()}
    station_search = {**STATION_SEARCH_CONFIG, **overrides.station_search.model_dump()}

    return {
        "planner": planner,
        "station_search": station_search,
        "station_provider": overrides.station_provider,
    }
