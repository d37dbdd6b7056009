"""
Population source port interface.

This module defines the protocol for population data sources.
"""

from typing import Protocol
from area_impact.core.models import BoundingBox, PopulationResult

class PopulationSourcePort(Protocol):
    """인구 소스 포트 인터페이스"""

    name: str

    async def fetch_population(self, bbox: BoundingBox) -> PopulationResult:
        """
        경계 상자 내 인구를 조회합니다.

        실패는 예외가 아니라 success=False 결과로 반환합니다.

        Args:
            bbox: 조회할 경계 상자

        Returns:
            인구 조회 결과
        """
        ...
