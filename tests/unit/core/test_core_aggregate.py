"""
aggregate 및 building_categories 모듈 테스트

피해 인원 추정, 결과 병합, 건물 버킷 분류를 검증합니다.
"""

import pytest
from hypothesis import given, strategies as st

from area_impact.core.aggregate import estimate_affected_people, merge_analysis
from area_impact.core.building_categories import (
    is_specific_building_type,
    summarize_categories,
)
from area_impact.core.geometry import haversine_box_area_km2
from area_impact.core.models import BuildingResult, PopulationResult

from conftest import make_buildings, make_population


class TestEstimateAffectedPeople:
    """피해 예상 인원 추정 테스트"""

    def test_occupancy_exceeds_registered_population(self):
        """주거 추정치가 더 크면 주거 추정치 사용"""
        assert estimate_affected_people(100, 200) == 500

    def test_registered_population_is_floor(self):
        """등록 인구가 더 크면 등록 인구 사용"""
        assert estimate_affected_people(10_000, 200) == 10_000

    @pytest.mark.parametrize("total,residential,expected", [
        (0, 3, 7.5),
        (2, 1, 2.5),
        (7, 3, 7.5),
    ])
    def test_fractional_occupancy_is_exact(self, total, residential, expected):
        """주거 추정치는 반올림 없이 2.5의 배수"""
        assert estimate_affected_people(total, residential) == expected

    @given(
        total=st.integers(min_value=0, max_value=10_000_000),
        residential=st.integers(min_value=0, max_value=1_000_000),
    )
    def test_is_max_of_both_estimates(self, total, residential):
        """추정치는 등록 인구와 주거 추정치 중 큰 값"""
        affected = estimate_affected_people(total, residential)

        assert affected == max(total, residential * 2.5)


class TestMergeAnalysis:
    """결과 병합 테스트"""

    def test_summary_fields(self, kinshasa_bbox):
        """요약 필드 교차 참조"""
        analysis = merge_analysis(
            kinshasa_bbox,
            make_population(100),
            make_buildings(200, services={"hospital": 2, "school": 3, "police": 1, "cafe": 4}),
        )

        summary = analysis.summary
        assert summary.total_population == 100
        assert summary.residential_buildings == 200
        assert summary.estimated_affected_people == 500
        assert summary.population_data_points == 1
        assert summary.building_data_coverage == "Good"
        assert summary.critical_facilities.hospitals == 2
        assert summary.critical_facilities.schools == 3
        assert summary.critical_facilities.police_stations == 1
        assert summary.critical_facilities.fire_stations == 0
        assert summary.area_km2 == round(haversine_box_area_km2(kinshasa_bbox), 2)
        assert summary.success is True
        assert analysis.success is True

    def test_population_failure_keeps_buildings(self, kinshasa_bbox):
        """인구 실패 시 건물 데이터 유지"""
        buildings = make_buildings(40, total=90)
        analysis = merge_analysis(
            kinshasa_bbox,
            PopulationResult.failed("overpass: HTTP 504", bbox=kinshasa_bbox),
            buildings,
        )

        assert analysis.success is False
        assert analysis.buildings == buildings
        assert analysis.summary.total_buildings == 90
        assert analysis.summary.total_population == 0
        assert analysis.summary.estimated_affected_people == 100

    def test_building_failure_keeps_population(self, kinshasa_bbox):
        """건물 실패 시 인구 데이터 유지"""
        analysis = merge_analysis(
            kinshasa_bbox,
            make_population(12_500),
            BuildingResult.failed("overpass: timed out", bbox=kinshasa_bbox),
        )

        assert analysis.success is False
        assert analysis.summary.total_population == 12_500
        assert analysis.summary.total_buildings == 0
        assert analysis.summary.building_data_coverage == "Limited"
        assert analysis.summary.estimated_affected_people == 12_500

    @pytest.mark.parametrize("pop_ok,bld_ok", [(True, True), (True, False), (False, True), (False, False)])
    def test_success_is_conjunction(self, kinshasa_bbox, pop_ok, bld_ok):
        """전체 성공은 두 소스 성공의 논리곱"""
        analysis = merge_analysis(
            kinshasa_bbox,
            make_population(10, success=pop_ok),
            make_buildings(1, success=bld_ok),
        )

        assert analysis.success is (pop_ok and bld_ok)

    def test_custom_occupancy(self, kinshasa_bbox):
        """건물당 거주 인원 설정"""
        analysis = merge_analysis(
            kinshasa_bbox, make_population(0), make_buildings(10), persons_per_building=4.0
        )

        assert analysis.summary.estimated_affected_people == 40

    def test_odd_residential_count_not_rounded(self, kinshasa_bbox):
        """홀수 주거 건물 수도 반올림 없이 보고"""
        analysis = merge_analysis(kinshasa_bbox, make_population(2), make_buildings(1))

        assert analysis.summary.estimated_affected_people == 2.5
        assert analysis.model_dump()["summary"]["estimated_affected_people"] == 2.5


class TestBuildingCategories:
    """건물 버킷 분류 테스트"""

    @pytest.mark.parametrize("building_type,expected", [
        ("yes", False),
        ("unknown", False),
        ("house", True),
        ("hospital", True),
    ])
    def test_specific_type(self, building_type, expected):
        """generic 유형 판정"""
        assert is_specific_building_type(building_type) is expected

    def test_buckets(self):
        """건물 태그와 편의시설 태그의 버킷 합산"""
        summary = summarize_categories(
            {"house": 5, "apartments": 2, "terrace": 1, "retail": 3, "office": 1,
             "school": 1, "hospital": 1, "warehouse": 2, "church": 4},
            {"school": 2, "university": 1, "clinic": 3, "pharmacy": 1, "hospital": 1,
             "police": 1, "fire_station": 2, "bank": 5},
            density_per_km2=12.5,
        )

        assert summary.residential == 8
        assert summary.commercial == 4
        assert summary.educational == 4
        assert summary.healthcare == 6
        assert summary.emergency_services == 3
        assert summary.infrastructure == 2
        assert summary.density_per_km2 == 12.5

    def test_empty(self):
        """빈 입력은 모든 버킷 0"""
        summary = summarize_categories({}, {})

        assert summary.model_dump() == {
            "residential": 0, "commercial": 0, "educational": 0, "healthcare": 0,
            "emergency_services": 0, "infrastructure": 0, "density_per_km2": 0.0,
        }
