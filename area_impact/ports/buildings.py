"""
Building source port interface.

This module defines the protocol for building and amenity data sources.
"""

from typing import Protocol
from area_impact.core.models import BoundingBox, BuildingResult

class BuildingSourcePort(Protocol):
    """건물/편의시설 소스 포트 인터페이스"""

    name: str

    async def fetch_buildings(self, bbox: BoundingBox) -> BuildingResult:
        """
        경계 상자 내 건물과 편의시설을 조회합니다.

        실패는 예외가 아니라 success=False 결과로 반환합니다.

        Args:
            bbox: 조회할 경계 상자

        Returns:
            건물 조회 결과
        """
        ...
