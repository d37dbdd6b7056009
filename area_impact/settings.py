# area_impact/settings.py
from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, Field

from area_impact.adapters.census.client import DEFAULT_ACS_URL, DEFAULT_ACS_VARIABLE, DEFAULT_GEOCODER_URL
from area_impact.adapters.http import DEFAULT_USER_AGENT
from area_impact.adapters.overpass.client import DEFAULT_OVERPASS_URL

class OverpassConfig(BaseModel):
    base_url: str = DEFAULT_OVERPASS_URL
    timeout_sec: float = 30.0                 # 호출당 전송 타임아웃
    query_timeout_sec: int = 25               # QL [timeout:N]
    max_retries: int = 0                      # 0 = 단일 시도
    user_agent: str = DEFAULT_USER_AGENT

class CensusConfig(BaseModel):
    geocoder_url: str = DEFAULT_GEOCODER_URL
    acs_url: str = DEFAULT_ACS_URL
    acs_variable: str = DEFAULT_ACS_VARIABLE
    api_key: str | None = None
    timeout_sec: float = 15.0
    fallback_density_per_km2: float = 1000.0

class PopulationConfig(BaseModel):
    strategy: Literal["overpass", "census"] = "overpass"

class AggregationConfig(BaseModel):
    source_timeout_sec: float = 30.0
    persons_per_residential_building: float = 2.5

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "area-impact"
    build_version: str = "0.1.0"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    overpass: OverpassConfig = Field(default_factory=OverpassConfig)
    census: CensusConfig = Field(default_factory=CensusConfig)
    population: PopulationConfig = Field(default_factory=PopulationConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    observability: Observability = Field(default_factory=Observability)
