"""
Overpass-backed population source.

Sums the population tags of place nodes inside the bounding box. This
is the primary population strategy.
"""

import re
import time
from typing import Dict, List, Optional

from area_impact.adapters.overpass.client import OverpassClient
from area_impact.adapters.overpass.queries import population_query
from area_impact.core.errors import ParseFailure, SourceError
from area_impact.core.geometry import haversine_box_area_km2
from area_impact.core.models import BoundingBox, PlaceRecord, PopulationResult
from area_impact.observability import metrics
from area_impact.observability.logging_setup import get_logger

log = get_logger("area_impact.overpass.population")

# 천 단위 구분자는 쉼표 또는 공백 뒤 정확히 세 자리, 소수점 이하는 버림
_LEADING_NUMBER = re.compile(r"\d{1,3}(?:[, ]\d{3})+(?!\d)|\d+")


def parse_population_tag(raw: Optional[str]) -> int:
    """
    population 태그 값을 정수로 변환합니다.

    천 단위 구분자("12,345", "1 234")를 허용하고 소수부("2500.5")는 버립니다.
    숫자가 없으면 0을 반환합니다.
    """
    if raw is None:
        return 0
    match = _LEADING_NUMBER.search(str(raw))
    if not match:
        return 0
    digits = re.sub(r"\D", "", match.group(0))
    return int(digits) if digits else 0


def to_place(element: Dict) -> PlaceRecord:
    tags = element.get("tags") or {}
    try:
        return PlaceRecord(
            name=tags.get("name"),
            population=parse_population_tag(tags.get("population")),
            lat=float(element["lat"]),
            lon=float(element["lon"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ParseFailure("overpass", f"malformed place element {element.get('id')}: {e}")


class OverpassPopulationSource:
    """Overpass place 태그 기반 인구 소스"""

    name = "overpass_population"

    def __init__(self, client: OverpassClient, *, query_timeout_sec: int = 25):
        self.client = client
        self.query_timeout_sec = query_timeout_sec

    async def fetch_population(self, bbox: BoundingBox) -> PopulationResult:
        """
        경계 상자 내 place 노드의 인구를 합산합니다.

        Args:
            bbox: 조회할 경계 상자

        Returns:
            인구 조회 결과 (실패 시 success=False)
        """
        started = time.perf_counter()
        try:
            elements = await self.client.query(population_query(bbox, self.query_timeout_sec))
            places: List[PlaceRecord] = [to_place(el) for el in elements]
        except SourceError as e:
            metrics.observe_source(self.name, "failure", time.perf_counter() - started)
            log.warning(f"인구 조회 실패 error:{e}")
            return PopulationResult.failed(str(e), bbox=bbox)

        total = sum(p.population for p in places)
        area = haversine_box_area_km2(bbox)

        metrics.observe_source(self.name, "success", time.perf_counter() - started)
        log.info(f"인구 조회 완료 places:{len(places)} total:{total}")

        return PopulationResult(
            bbox=bbox,
            total_population=total,
            places=places,
            area_km2=round(area, 2),
            density_per_km2=round(total / area, 2) if area > 0 else 0.0,
            estimation_method="overpass_place_tags",
        )
