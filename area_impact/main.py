# area_impact/main.py
import os, asyncio
from contextlib import AsyncExitStack
from typing import Optional
import uvicorn
from area_impact.settings import Settings
from area_impact.observability.health import create_app
from area_impact.observability.logging_setup import configure_logging, get_logger
from area_impact.adapters.overpass import OverpassClient, OverpassPopulationSource, OverpassBuildingSource
from area_impact.adapters.census import CensusClient, CensusTractPopulationSource
from area_impact.orchestrators import AreaAnalyzer, AnalysisService

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # OVERPASS
    s.overpass.base_url = os.getenv("OVERPASS_URL", s.overpass.base_url)
    s.overpass.timeout_sec = float(os.getenv("OVERPASS_TIMEOUT_SEC", s.overpass.timeout_sec))
    s.overpass.query_timeout_sec = int(os.getenv("OVERPASS_QUERY_TIMEOUT_SEC", s.overpass.query_timeout_sec))
    s.overpass.max_retries = int(os.getenv("OVERPASS_MAX_RETRIES", s.overpass.max_retries))

    # CENSUS
    s.census.api_key = os.getenv("CENSUS_API_KEY", s.census.api_key)
    s.census.timeout_sec = float(os.getenv("CENSUS_TIMEOUT_SEC", s.census.timeout_sec))
    s.census.fallback_density_per_km2 = float(os.getenv("FALLBACK_DENSITY_PER_KM2", s.census.fallback_density_per_km2))

    # 인구 전략
    strategy = os.getenv("POPULATION_STRATEGY", s.population.strategy).lower()
    if strategy not in ("overpass", "census"):
        raise ValueError(f"POPULATION_STRATEGY must be 'overpass' or 'census', got {strategy!r}")
    s.population.strategy = strategy

    # 집계
    s.aggregation.source_timeout_sec = float(os.getenv("SOURCE_TIMEOUT_SEC", s.aggregation.source_timeout_sec))

    # 관측성
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

def build_analyzer(s: Settings, overpass: OverpassClient, census: Optional[CensusClient] = None) -> AreaAnalyzer:
    if s.population.strategy == "census":
        if census is None:
            raise ValueError("census strategy requires a CensusClient")
        population = CensusTractPopulationSource(census, fallback_density_per_km2=s.census.fallback_density_per_km2)
    else:
        population = OverpassPopulationSource(overpass, query_timeout_sec=s.overpass.query_timeout_sec)

    buildings = OverpassBuildingSource(overpass, query_timeout_sec=s.overpass.query_timeout_sec)

    return AreaAnalyzer(
        population,
        buildings,
        source_timeout_sec=s.aggregation.source_timeout_sec,
        persons_per_building=s.aggregation.persons_per_residential_building,
    )

async def main():
    s = build_settings()
    configure_logging(s.observability.log_level, s.observability.log_json)
    log = get_logger()
    log.info(f"설정 로드 완료 population_strategy:{s.population.strategy}")

    overpass = OverpassClient(
        s.overpass.base_url,
        timeout=s.overpass.timeout_sec,
        max_retries=s.overpass.max_retries,
        user_agent=s.overpass.user_agent,
    )
    census = None
    if s.population.strategy == "census":
        census = CensusClient(
            s.census.geocoder_url,
            s.census.acs_url,
            acs_variable=s.census.acs_variable,
            api_key=s.census.api_key,
            timeout=s.census.timeout_sec,
        )

    async with AsyncExitStack() as stack:
        await stack.enter_async_context(overpass)
        if census is not None:
            await stack.enter_async_context(census)

        service = AnalysisService(build_analyzer(s, overpass, census))
        app = create_app(s, service)
        log.info(f"HTTP 서버 시작 port:{s.observability.http_port}")

        server = uvicorn.Server(uvicorn.Config(
            app, host="0.0.0.0", port=s.observability.http_port,
            log_level=s.observability.log_level.lower()
        ))
        await server.serve()

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
