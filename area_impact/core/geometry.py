"""
Geographic utilities for area impact analysis.

This module provides the planar and spherical approximations used
to turn a drawn polygon into a bounding box and area estimates.
"""

import math
from typing import Optional, Sequence

from .models import BoundingBox, Coordinate

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0


def compute_bounding_box(polygon: Sequence[Sequence[float]]) -> Optional[BoundingBox]:
    """
    폴리곤의 경계 상자를 계산합니다.

    Args:
        polygon: 폴리곤의 꼭짓점들 [(경도, 위도), ...]

    Returns:
        경계 상자, 빈 입력이면 None

    Raises:
        InvalidGeometry: 모든 꼭짓점이 같은 위도 또는 경도에 있는 경우
    """
    if not polygon:
        return None

    lons = [p[0] for p in polygon]
    lats = [p[1] for p in polygon]

    return BoundingBox(south=min(lats), west=min(lons), north=max(lats), east=max(lons))


def shoelace_area_km2(polygon: Sequence[Sequence[float]]) -> float:
    """
    신발끈 공식으로 폴리곤 면적을 근사합니다 (제곱킬로미터).

    마지막 꼭짓점에서 첫 꼭짓점으로 돌아가는 변은 더하지 않으므로
    닫힌 링이 필요하면 호출자가 첫 점을 끝에 반복해야 합니다.
    도시 규모 이하에서만 유효한 평면 근사입니다.

    Args:
        polygon: 폴리곤의 꼭짓점들 [(경도, 위도), ...]

    Returns:
        면적 (km²)
    """
    area = 0.0
    for i in range(len(polygon) - 1):
        x1, y1 = polygon[i][0], polygon[i][1]
        x2, y2 = polygon[i + 1][0], polygon[i + 1][1]
        area += x1 * y2 - x2 * y1

    return abs(area / 2) * KM_PER_DEGREE * KM_PER_DEGREE


def haversine_box_area_km2(bbox: BoundingBox) -> float:
    """
    구면 근사로 경계 상자 면적을 계산합니다 (제곱킬로미터).

    밀도 정규화 전용이며 폴리곤 면적과 혼용하지 않습니다.

    Args:
        bbox: 경계 상자

    Returns:
        면적 (km²)
    """
    lat_diff = math.radians(abs(bbox.north - bbox.south))
    lon_diff = math.radians(abs(bbox.east - bbox.west))
    avg_lat = math.radians((bbox.south + bbox.north) / 2)

    return EARTH_RADIUS_KM * EARTH_RADIUS_KM * lat_diff * lon_diff * math.cos(avg_lat)


def polygon_centroid(polygon: Sequence[Sequence[float]]) -> Optional[Coordinate]:
    """꼭짓점 평균 중심 (경도, 위도)을 반환합니다. 닫힘 꼭짓점은 한 번만 셉니다."""
    if not polygon:
        return None

    points = list(polygon)
    if len(points) > 1 and tuple(points[0]) == tuple(points[-1]):
        points = points[:-1]

    lon = sum(p[0] for p in points) / len(points)
    lat = sum(p[1] for p in points) / len(points)
    return (lon, lat)


def count_distinct_points(polygon: Sequence[Sequence[float]]) -> int:
    return len({(p[0], p[1]) for p in polygon})


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    좌표가 유효한지 확인합니다.

    Args:
        lat: 위도
        lon: 경도

    Returns:
        좌표가 유효하면 True
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180
