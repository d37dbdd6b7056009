"""
Census-tract population source.

Resolves the bounding-box centre to a tract and area-weights the tract
population. When the tract cannot be resolved it falls back to a flat
density assumption, flagged through estimation_method.
"""

import time

from area_impact.adapters.census.client import CensusClient
from area_impact.core.errors import SourceError
from area_impact.core.geometry import haversine_box_area_km2
from area_impact.core.models import BoundingBox, PlaceRecord, PopulationResult
from area_impact.observability import metrics
from area_impact.observability.logging_setup import get_logger

log = get_logger("area_impact.census.population")

DEFAULT_FALLBACK_DENSITY_PER_KM2 = 1000.0


def area_weight(bbox_area_km2: float, tract_area_km2: float) -> float:
    """경계 상자가 조사구보다 크면 과대 계산을 막기 위해 1.0으로 제한합니다."""
    if tract_area_km2 <= 0:
        return 1.0
    return min(bbox_area_km2 / tract_area_km2, 1.0)


class CensusTractPopulationSource:
    """조사구 면적 가중 인구 소스"""

    name = "census_population"

    def __init__(self,
                 client: CensusClient,
                 *,
                 fallback_density_per_km2: float = DEFAULT_FALLBACK_DENSITY_PER_KM2):
        self.client = client
        self.fallback_density_per_km2 = fallback_density_per_km2

    async def fetch_population(self, bbox: BoundingBox) -> PopulationResult:
        """
        경계 상자 중심의 조사구 인구를 면적 가중하여 추정합니다.

        Args:
            bbox: 조회할 경계 상자

        Returns:
            인구 조회 결과 (조사구 조회 실패 시 고정 밀도 대체값)
        """
        started = time.perf_counter()
        area = haversine_box_area_km2(bbox)
        lon, lat = bbox.center

        try:
            tract = await self.client.resolve_tract(lon, lat)
            tract_population = await self.client.tract_population(tract)
        except SourceError as e:
            metrics.observe_source(self.name, "fallback", time.perf_counter() - started)
            log.warning(f"조사구 조회 실패, 고정 밀도로 대체 error:{e}")
            return self._fallback(bbox, area, str(e))

        weight = area_weight(area, tract.land_area_km2)
        population = round(tract_population * weight)

        metrics.observe_source(self.name, "success", time.perf_counter() - started)
        log.info(f"조사구 인구 조회 완료 geoid:{tract.geoid} weight:{weight:.3f} population:{population}")

        return PopulationResult(
            bbox=bbox,
            total_population=population,
            places=[PlaceRecord(name=f"Census Tract {tract.geoid}",
                                population=population, lat=lat, lon=lon)],
            area_km2=round(area, 2),
            density_per_km2=round(population / area, 2) if area > 0 else 0.0,
            estimation_method="census_tract_area_weighted",
        )

    def _fallback(self, bbox: BoundingBox, area: float, reason: str) -> PopulationResult:
        population = round(self.fallback_density_per_km2 * area)
        return PopulationResult(
            bbox=bbox,
            total_population=population,
            area_km2=round(area, 2),
            density_per_km2=self.fallback_density_per_km2 if area > 0 else 0.0,
            estimation_method="flat_density_fallback",
            success=False,
            error_detail=(
                f"census tract lookup failed ({reason}); "
                f"assumed {self.fallback_density_per_km2:g} people/km²"
            ),
        )
