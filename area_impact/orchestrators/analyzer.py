"""
Scatter-gather aggregator for area impact analysis.

This module dispatches the population and building sources in parallel,
joins on both and merges whatever they returned. A failing or hanging
source degrades the result but never aborts the aggregation.
"""

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

from area_impact.core.aggregate import PERSONS_PER_RESIDENTIAL_BUILDING, merge_analysis
from area_impact.core.errors import SourceError
from area_impact.core.models import AreaAnalysis, BoundingBox, BuildingResult, PopulationResult
from area_impact.ports.buildings import BuildingSourcePort
from area_impact.ports.population import PopulationSourcePort
from area_impact.observability import metrics
from area_impact.observability.logging_setup import get_logger

log = get_logger("area_impact.analyzer")

R = TypeVar("R", PopulationResult, BuildingResult)


class AreaAnalyzer:
    """인구/건물 소스 병렬 집계기"""

    def __init__(self,
                 population_source: PopulationSourcePort,
                 building_source: BuildingSourcePort,
                 *,
                 source_timeout_sec: float = 30.0,
                 persons_per_building: float = PERSONS_PER_RESIDENTIAL_BUILDING):
        """
        초기화합니다.

        Args:
            population_source: 인구 소스
            building_source: 건물 소스
            source_timeout_sec: 소스별 최대 대기 시간 (초)
            persons_per_building: 주거 건물당 거주 인원
        """
        self.population_source = population_source
        self.building_source = building_source
        self.source_timeout_sec = source_timeout_sec
        self.persons_per_building = persons_per_building

    async def analyze(self, bbox: BoundingBox) -> AreaAnalysis:
        """
        두 소스를 동시에 조회하고 결과를 병합합니다.

        Args:
            bbox: 분석 경계 상자

        Returns:
            영역 분석 결과 (부분 실패 포함)
        """
        t0 = time.perf_counter()
        log.info(f"영역 분석 시작 bbox:{bbox.south:.4f},{bbox.west:.4f},{bbox.north:.4f},{bbox.east:.4f}")

        population, buildings = await asyncio.gather(
            self._settle(
                getattr(self.population_source, "name", "population"),
                lambda: self.population_source.fetch_population(bbox),
                lambda detail: PopulationResult.failed(detail, bbox=bbox),
            ),
            self._settle(
                getattr(self.building_source, "name", "buildings"),
                lambda: self.building_source.fetch_buildings(bbox),
                lambda detail: BuildingResult.failed(detail, bbox=bbox),
            ),
        )

        analysis = merge_analysis(
            bbox, population, buildings,
            persons_per_building=self.persons_per_building
        )

        elapsed = time.perf_counter() - t0
        outcome = "complete" if analysis.success else "degraded"
        metrics.analyses.labels(outcome=outcome).inc()
        metrics.analysis_seconds.observe(elapsed)
        log.info(f"영역 분석 완료 outcome:{outcome} elapsed:{elapsed:.2f}s "
                 f"affected:{analysis.summary.estimated_affected_people}")
        return analysis

    async def _settle(self,
                      name: str,
                      call: Callable[[], Awaitable[R]],
                      failed: Callable[[str], R]) -> R:
        """소스 호출을 항상 결과 레코드로 귀결시킵니다."""
        try:
            return await asyncio.wait_for(call(), timeout=self.source_timeout_sec)
        except asyncio.TimeoutError:
            log.warning(f"소스 타임아웃 source:{name} timeout:{self.source_timeout_sec}s")
            return failed(f"{name} timed out after {self.source_timeout_sec}s")
        except SourceError as e:
            log.warning(f"소스 실패 source:{name} error:{e}")
            return failed(str(e))
        except Exception as e:
            log.error(f"소스 예기치 않은 오류 source:{name} error:{type(e).__name__}: {e}")
            return failed(f"{name} failed unexpectedly: {type(e).__name__}: {e}")
