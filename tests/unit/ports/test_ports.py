"""
Port 모듈 단위 테스트

이 모듈은 포트 인터페이스와 어댑터 구현의 일치를 테스트합니다.
"""

import inspect

import pytest

from area_impact.adapters.census import CensusTractPopulationSource
from area_impact.adapters.overpass import OverpassBuildingSource, OverpassPopulationSource
from area_impact.core.models import SeverityTier
from area_impact.core.report import assemble
from area_impact.ports import BuildingSourcePort, NarrativePort, PopulationSourcePort


class TestSourcePorts:
    """소스 포트 인터페이스 테스트"""

    @pytest.mark.parametrize("adapter", [OverpassPopulationSource, CensusTractPopulationSource])
    def test_population_adapters(self, adapter):
        """인구 어댑터는 포트와 같은 코루틴 메서드를 가짐"""
        assert inspect.iscoroutinefunction(adapter.fetch_population)
        assert isinstance(adapter.name, str)
        assert hasattr(PopulationSourcePort, "fetch_population")

    def test_building_adapter(self):
        """건물 어댑터는 포트와 같은 코루틴 메서드를 가짐"""
        assert inspect.iscoroutinefunction(OverpassBuildingSource.fetch_buildings)
        assert hasattr(BuildingSourcePort, "fetch_buildings")

    def test_adapter_names_are_distinct(self):
        """소스 이름은 메트릭 레이블로 쓰이므로 서로 달라야 함"""
        names = {OverpassPopulationSource.name, CensusTractPopulationSource.name,
                 OverpassBuildingSource.name}

        assert len(names) == 3


class TestNarrativePort:
    """서술 생성 포트 테스트"""

    @pytest.fixture
    def narrator(self):
        """테스트용 서술 생성기"""
        class TemplateNarrator:
            async def narrate(self, report):
                summary = report.analysis.summary
                return (f"{report.metadata.severity.value} event near {report.metadata.location}: "
                        f"about {summary.estimated_affected_people:g} people affected.")

        return TemplateNarrator()

    @pytest.mark.asyncio
    async def test_narrate(self, narrator, sample_analysis):
        """보고서에서 서술 생성"""
        report = assemble(sample_analysis, SeverityTier.SEVERE, "Kinshasa", 8.0)

        text = await narrator.narrate(report)

        assert text == "SEVERE event near Kinshasa: about 500 people affected."
        assert hasattr(NarrativePort, "narrate")
