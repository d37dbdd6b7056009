"""
Overpass-backed building and amenity source.

Runs the building-footprint and amenity queries concurrently and
categorises the tag counts through the shared bucket table.
"""

import asyncio
import time
from collections import Counter
from typing import Dict, List

from area_impact.adapters.overpass.client import OverpassClient
from area_impact.adapters.overpass.queries import buildings_query, services_query
from area_impact.core.building_categories import (
    AMENITY_ALLOW_LIST,
    is_specific_building_type,
    summarize_categories,
)
from area_impact.core.errors import SourceError
from area_impact.core.geometry import haversine_box_area_km2
from area_impact.core.models import BoundingBox, BuildingResult
from area_impact.observability import metrics
from area_impact.observability.logging_setup import get_logger

log = get_logger("area_impact.overpass.buildings")


def count_building_types(elements: List[Dict]) -> Dict[str, int]:
    counts = Counter((el.get("tags") or {}).get("building", "unknown") for el in elements)
    return dict(counts)


def count_service_types(elements: List[Dict]) -> Dict[str, int]:
    allowed = set(AMENITY_ALLOW_LIST)
    counts = Counter()
    for el in elements:
        amenity = (el.get("tags") or {}).get("amenity")
        if amenity in allowed:
            counts[amenity] += 1
    return dict(counts)


def build_result(bbox: BoundingBox,
                 building_elements: List[Dict],
                 service_elements: List[Dict]) -> BuildingResult:
    """
    원시 요소 목록을 건물 결과로 변환합니다.

    Args:
        bbox: 경계 상자
        building_elements: building 쿼리 결과
        service_elements: amenity 쿼리 결과

    Returns:
        건물 조회 결과
    """
    building_counts = count_building_types(building_elements)
    specific = {t: n for t, n in building_counts.items() if is_specific_building_type(t)}
    services = count_service_types(service_elements)

    area = haversine_box_area_km2(bbox)
    total = len(building_elements)
    density = round(total / area, 2) if area > 0 else 0.0

    return BuildingResult(
        bbox=bbox,
        area_km2=round(area, 2),
        total_buildings=total,
        generic_buildings=building_counts.get("yes", 0),
        specific_buildings_count=sum(specific.values()),
        building_type_counts=building_counts,
        specific_building_types=specific,
        service_type_counts=services,
        summary=summarize_categories(specific, services, density),
    )


class OverpassBuildingSource:
    """Overpass building/amenity 태그 기반 건물 소스"""

    name = "overpass_buildings"

    def __init__(self, client: OverpassClient, *, query_timeout_sec: int = 25):
        self.client = client
        self.query_timeout_sec = query_timeout_sec

    async def fetch_buildings(self, bbox: BoundingBox) -> BuildingResult:
        """
        건물 쿼리와 편의시설 쿼리를 동시에 실행하고 집계합니다.

        둘 중 하나라도 실패하면 카운트가 0인 실패 결과를 반환합니다.

        Args:
            bbox: 조회할 경계 상자

        Returns:
            건물 조회 결과
        """
        started = time.perf_counter()
        results = await asyncio.gather(
            self.client.query(buildings_query(bbox, self.query_timeout_sec)),
            self.client.query(services_query(bbox, self.query_timeout_sec)),
            return_exceptions=True
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        for err in errors:
            if not isinstance(err, SourceError):
                raise err

        if errors:
            detail = "; ".join(str(e) for e in errors)
            metrics.observe_source(self.name, "failure", time.perf_counter() - started)
            log.warning(f"건물 조회 실패 error:{detail}")
            return BuildingResult.failed(detail, bbox=bbox)

        building_elements, service_elements = results
        result = build_result(bbox, building_elements, service_elements)

        metrics.observe_source(self.name, "success", time.perf_counter() - started)
        log.info(f"건물 조회 완료 buildings:{result.total_buildings} "
                 f"services:{sum(result.service_type_counts.values())}")
        return result
