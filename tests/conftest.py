"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from area_impact.core.aggregate import merge_analysis
from area_impact.core.models import (
    BoundingBox, BuildingResult, BuildingSummary, PlaceRecord, PopulationResult,
)
from area_impact.settings import Settings


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    return settings


@pytest.fixture
def kinshasa_bbox():
    """킨샤사 도심 경계 상자"""
    return BoundingBox(south=-4.33, west=15.29, north=-4.31, east=15.31)


@pytest.fixture
def equator_square():
    """적도 부근 0.01° 정사각형 (닫힌 링)"""
    return [
        (0.0, 0.0),
        (0.01, 0.0),
        (0.01, 0.01),
        (0.0, 0.01),
        (0.0, 0.0),
    ]


@pytest.fixture
def place_elements():
    """Overpass place 노드 응답"""
    return [
        {"type": "node", "id": 1, "lat": -4.32, "lon": 15.30,
         "tags": {"name": "Gombe", "place": "suburb", "population": "12,000"}},
        {"type": "node", "id": 2, "lat": -4.315, "lon": 15.295,
         "tags": {"name": "Barumbu", "place": "suburb", "population": "500"}},
    ]


@pytest.fixture
def building_elements():
    """Overpass building 응답 (태그만)"""
    types = ["yes", "yes", "yes", "house", "house", "apartments", "school", "garage"]
    elements = [{"type": "way", "id": i, "tags": {"building": t}} for i, t in enumerate(types)]
    elements.append({"type": "way", "id": 99})
    return elements


@pytest.fixture
def service_elements():
    """Overpass amenity 응답 (태그만)"""
    amenities = ["hospital", "hospital", "school", "police", "fire_station",
                 "driving_school", "clinic"]
    return [{"type": "node", "id": 100 + i, "tags": {"amenity": a}} for i, a in enumerate(amenities)]


def make_population(total: int = 0, *, success: bool = True, **kwargs) -> PopulationResult:
    """테스트용 인구 결과"""
    places = [PlaceRecord(name="p", population=total, lat=0.0, lon=0.0)] if total else []
    return PopulationResult(total_population=total, places=places, success=success, **kwargs)


def make_buildings(residential: int = 0, *, total: int = None, success: bool = True,
                   services: dict = None, **kwargs) -> BuildingResult:
    """테스트용 건물 결과"""
    total = residential if total is None else total
    return BuildingResult(
        total_buildings=total,
        specific_buildings_count=residential,
        specific_building_types={"house": residential} if residential else {},
        building_type_counts={"house": residential} if residential else {},
        service_type_counts=services or {},
        summary=BuildingSummary(residential=residential),
        success=success,
        **kwargs
    )


@pytest.fixture
def sample_analysis(kinshasa_bbox):
    """테스트용 영역 분석 결과"""
    return merge_analysis(
        kinshasa_bbox,
        make_population(100),
        make_buildings(200, services={"hospital": 2, "school": 3}),
    )


@pytest.fixture
def mock_overpass_client():
    """테스트용 Overpass 클라이언트"""
    client = Mock()
    client.query = AsyncMock(return_value=[])
    return client
