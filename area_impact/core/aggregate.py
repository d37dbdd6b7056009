"""
Aggregation of population and building results.

This module contains the pure merge step that cross-references the
two source results into a single area summary.
"""

from .geometry import haversine_box_area_km2
from .building_categories import CRITICAL_FACILITY_AMENITIES
from .models import (
    AreaAnalysis,
    AreaSummary,
    BoundingBox,
    BuildingResult,
    CriticalFacilities,
    PopulationResult,
)

# 주거 건물 1동당 평균 거주 인원
PERSONS_PER_RESIDENTIAL_BUILDING = 2.5


def estimate_affected_people(total_population: int,
                             residential_buildings: int,
                             persons_per_building: float = PERSONS_PER_RESIDENTIAL_BUILDING) -> float:
    """
    피해 예상 인원을 추정합니다.

    등록 인구와 주거 건물 기반 추정치 중 큰 값입니다. 주거 추정치는
    반올림하지 않으므로 2.5의 배수가 그대로 보고됩니다.

    Args:
        total_population: 인구 소스가 보고한 인구
        residential_buildings: 주거 건물 수
        persons_per_building: 건물당 거주 인원

    Returns:
        피해 예상 인원
    """
    occupancy_estimate = residential_buildings * persons_per_building
    return float(max(total_population, occupancy_estimate))


def merge_analysis(bbox: BoundingBox,
                   population: PopulationResult,
                   buildings: BuildingResult,
                   *,
                   persons_per_building: float = PERSONS_PER_RESIDENTIAL_BUILDING) -> AreaAnalysis:
    """
    두 소스 결과를 하나의 영역 분석으로 병합합니다.

    한쪽 소스가 실패해도 나머지 데이터는 그대로 유지됩니다.

    Args:
        bbox: 분석 경계 상자
        population: 인구 소스 결과
        buildings: 건물 소스 결과
        persons_per_building: 건물당 거주 인원

    Returns:
        영역 분석 결과
    """
    services = buildings.service_type_counts
    critical = CriticalFacilities(**{
        field: services.get(amenity, 0)
        for field, amenity in CRITICAL_FACILITY_AMENITIES.items()
    })

    residential = buildings.summary.residential

    summary = AreaSummary(
        area_km2=round(haversine_box_area_km2(bbox), 2),
        total_population=population.total_population,
        population_density=population.density_per_km2,
        total_buildings=buildings.total_buildings,
        building_density=buildings.summary.density_per_km2,
        critical_facilities=critical,
        residential_buildings=residential,
        estimated_affected_people=estimate_affected_people(
            population.total_population, residential, persons_per_building
        ),
        population_data_points=population.places_count,
        building_data_coverage="Good" if buildings.specific_buildings_count > 0 else "Limited",
        success=population.success and buildings.success,
    )

    return AreaAnalysis(
        bbox=bbox,
        population=population,
        buildings=buildings,
        summary=summary,
    )
