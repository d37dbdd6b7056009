"""
Report assembly for area impact analysis.

Pure data merge of the aggregated analysis, the severity tier and the
place metadata. The narrative step consumes the result; nothing here
performs I/O.
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from .geometry import count_distinct_points, polygon_centroid, shoelace_area_km2
from .models import (
    AreaAnalysis,
    BoundingBox,
    BuildingResult,
    Coordinate,
    DataSourceStatus,
    PopulationResult,
    Report,
    ReportMetadata,
    SeverityTier,
)

UNKNOWN_LOCATION = "Unknown"
URBAN_AREA_THRESHOLD_KM2 = 1.0


def _bbox_ring(bbox: BoundingBox) -> list:
    return [
        (bbox.west, bbox.south),
        (bbox.east, bbox.south),
        (bbox.east, bbox.north),
        (bbox.west, bbox.north),
        (bbox.west, bbox.south),
    ]


def classify_area_type(area_km2: float) -> str:
    return "Urban/Suburban area" if area_km2 > URBAN_AREA_THRESHOLD_KM2 else "Localized area"


def population_status(result: PopulationResult) -> DataSourceStatus:
    """인구 데이터의 실측/대체/불가 상태를 판정합니다."""
    if result.success:
        status = "live"
    elif result.estimation_method == "flat_density_fallback":
        status = "fallback"
    else:
        status = "unavailable"
    return DataSourceStatus(status=status, method=result.estimation_method,
                            error_detail=result.error_detail)


def building_status(result: BuildingResult) -> DataSourceStatus:
    """건물 데이터의 실측/불가 상태를 판정합니다."""
    return DataSourceStatus(
        status="live" if result.success else "unavailable",
        method=result.estimation_method,
        error_detail=result.error_detail,
    )


def assemble(analysis: AreaAnalysis,
             severity: SeverityTier,
             place_name: Optional[str],
             magnitude: float,
             *,
             polygon: Optional[Sequence[Sequence[float]]] = None,
             center: Optional[Coordinate] = None,
             fetched_at: Optional[datetime] = None) -> Report:
    """
    최종 보고서를 조립합니다.

    Args:
        analysis: 영역 분석 결과
        severity: 심각도 등급
        place_name: 장소 이름
        magnitude: 규모
        polygon: 사용자가 그린 폴리곤 (없으면 경계 상자를 폴리곤으로 사용)
        center: 지도 중심 (없으면 폴리곤 중심)
        fetched_at: 데이터 조회 시각 (없으면 현재 UTC)

    Returns:
        보고서
    """
    shape = list(polygon) if polygon else _bbox_ring(analysis.bbox)
    area_size = round(shoelace_area_km2(shape), 2)

    metadata = ReportMetadata(
        magnitude=magnitude,
        severity=severity,
        severity_description=severity.description,
        severity_color=severity.color,
        area_size_km2=area_size,
        area_type=classify_area_type(area_size),
        bounding_box=analysis.bbox,
        center=center or polygon_centroid(shape),
        location=place_name or UNKNOWN_LOCATION,
        vertex_count=count_distinct_points(shape),
        data_fetch_timestamp=fetched_at or datetime.now(timezone.utc),
    )

    data_sources: Dict[str, DataSourceStatus] = {
        "population": population_status(analysis.population),
        "buildings": building_status(analysis.buildings),
    }

    return Report(
        success=analysis.success,
        place_name=place_name,
        analysis=analysis,
        metadata=metadata,
        data_sources=data_sources,
    )
