"""
Overpass API client.

This module posts Overpass QL queries and returns the raw element list.
"""

from typing import Dict, List

from area_impact.adapters.http import JsonHttpClient
from area_impact.core.errors import ParseFailure, SourceUnavailable

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"


class OverpassClient(JsonHttpClient):
    """Overpass API 클라이언트"""

    source = "overpass"

    def __init__(self, base_url: str = DEFAULT_OVERPASS_URL, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url

    async def query(self, ql: str) -> List[Dict]:
        """
        Overpass QL 쿼리를 실행합니다.

        Args:
            ql: Overpass QL 쿼리

        Returns:
            elements 목록
        """
        data = await self._request_json("POST", self.base_url, data={"data": ql})

        if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
            raise ParseFailure(self.source, "response has no 'elements' list")

        # 서버 측 쿼리 타임아웃은 200 응답의 remark로 전달됨
        remark = data.get("remark")
        if remark and "error" in str(remark).lower():
            raise SourceUnavailable(self.source, str(remark))

        return data["elements"]
