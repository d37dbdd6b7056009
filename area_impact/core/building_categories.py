"""
Building and amenity categorisation table.

Every building source maps raw tag values onto the same summary buckets
through this table, so categorisation stays consistent across sources.
"""

from typing import Dict, Mapping, Tuple

from .models import BuildingSummary

# 생성형(building=yes) 및 태그 누락 건물은 세부 유형 집계에서 제외
GENERIC_BUILDING_TYPES = frozenset({"yes", "unknown"})

# 편의시설 조회 허용 목록
AMENITY_ALLOW_LIST: Tuple[str, ...] = (
    "hospital",
    "school",
    "university",
    "clinic",
    "pharmacy",
    "fire_station",
    "police",
    "bank",
    "restaurant",
    "cafe",
    "fuel",
    "atm",
    "post_office",
    "library",
    "theatre",
    "cinema",
)

# 버킷 -> (building 태그 값, amenity 태그 값)
SUMMARY_BUCKETS: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    "residential": (("apartments", "residential", "house", "terrace"), ()),
    "commercial": (("commercial", "retail", "office"), ()),
    "educational": (("school", "university"), ("school", "university")),
    "healthcare": (("hospital",), ("hospital", "clinic", "pharmacy")),
    "emergency_services": ((), ("fire_station", "police")),
    "infrastructure": (("garage", "shed", "warehouse"), ()),
}

# 핵심 시설 필드 -> amenity 태그 값
CRITICAL_FACILITY_AMENITIES: Dict[str, str] = {
    "hospitals": "hospital",
    "schools": "school",
    "fire_stations": "fire_station",
    "police_stations": "police",
}


def is_specific_building_type(building_type: str) -> bool:
    return building_type not in GENERIC_BUILDING_TYPES


def summarize_categories(specific_buildings: Mapping[str, int],
                         services: Mapping[str, int],
                         density_per_km2: float = 0.0) -> BuildingSummary:
    """
    세부 건물 유형과 편의시설 카운트를 요약 버킷으로 분류합니다.

    Args:
        specific_buildings: 세부 건물 유형별 카운트 (generic 제외)
        services: 편의시설 유형별 카운트
        density_per_km2: 건물 밀도

    Returns:
        요약 버킷
    """
    buckets = {}
    for bucket, (building_tags, amenity_tags) in SUMMARY_BUCKETS.items():
        buckets[bucket] = (
            sum(specific_buildings.get(tag, 0) for tag in building_tags)
            + sum(services.get(tag, 0) for tag in amenity_tags)
        )
    return BuildingSummary(density_per_km2=density_per_km2, **buckets)
