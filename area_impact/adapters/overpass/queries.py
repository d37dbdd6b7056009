"""
Overpass QL query builders.

Bounding boxes are rendered in Overpass order (south, west, north, east).
"""

from area_impact.core.building_categories import AMENITY_ALLOW_LIST
from area_impact.core.models import BoundingBox


def bbox_filter(bbox: BoundingBox) -> str:
    return f"{bbox.south},{bbox.west},{bbox.north},{bbox.east}"


def population_query(bbox: BoundingBox, timeout: int = 25) -> str:
    """인구 태그가 있는 place 노드 조회"""
    return (
        f'[out:json][timeout:{timeout}];'
        f'(node["place"]["population"]({bbox_filter(bbox)}););'
        f'out;'
    )


def buildings_query(bbox: BoundingBox, timeout: int = 25) -> str:
    """모든 building 태그 요소 조회 (태그만)"""
    b = bbox_filter(bbox)
    return (
        f'[out:json][timeout:{timeout}];'
        f'(way["building"]({b});'
        f'node["building"]({b});'
        f'relation["building"]({b}););'
        f'out tags;'
    )


def services_query(bbox: BoundingBox, timeout: int = 25) -> str:
    """허용 목록의 amenity 노드/웨이 조회 (태그만)"""
    b = bbox_filter(bbox)
    # 부분 일치 방지 (예: driving_school)
    pattern = "^(" + "|".join(AMENITY_ALLOW_LIST) + ")$"
    return (
        f'[out:json][timeout:{timeout}];'
        f'(node["amenity"~"{pattern}"]({b});'
        f'way["amenity"~"{pattern}"]({b}););'
        f'out tags;'
    )
