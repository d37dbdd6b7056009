"""
US Census Bureau client.

Resolves a coordinate to its census tract through the TIGERweb
geocoder and looks up the tract population in the ACS 5-year tables.
"""

from typing import Optional

from pydantic import BaseModel

from area_impact.adapters.http import JsonHttpClient
from area_impact.core.errors import ParseFailure, SourceUnavailable

DEFAULT_GEOCODER_URL = "https://geocoding.geo.census.gov/geocoder/geographies/coordinates"
DEFAULT_ACS_URL = "https://api.census.gov/data/2022/acs/acs5"
DEFAULT_ACS_VARIABLE = "B01003_001E"  # 총인구

TRACT_LAYER = "Census Tracts"


class TractInfo(BaseModel):
    """행정 조사구 식별자와 육지 면적"""
    geoid: str
    state: str
    county: str
    tract: str
    land_area_km2: float


class CensusClient(JsonHttpClient):
    """Census 지오코더 및 ACS 클라이언트"""

    source = "census"

    def __init__(self,
                 geocoder_url: str = DEFAULT_GEOCODER_URL,
                 acs_url: str = DEFAULT_ACS_URL,
                 *,
                 acs_variable: str = DEFAULT_ACS_VARIABLE,
                 api_key: Optional[str] = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.geocoder_url = geocoder_url
        self.acs_url = acs_url
        self.acs_variable = acs_variable
        self.api_key = api_key

    async def resolve_tract(self, lon: float, lat: float) -> TractInfo:
        """
        좌표가 속한 조사구를 조회합니다.

        Args:
            lon: 경도
            lat: 위도

        Returns:
            조사구 정보

        Raises:
            SourceUnavailable: 좌표에 해당하는 조사구가 없는 경우
            ParseFailure: 응답 구조가 예상과 다른 경우
        """
        params = {
            "x": lon,
            "y": lat,
            "benchmark": "Public_AR_Current",
            "vintage": "Current_Current",
            "layers": TRACT_LAYER,
            "format": "json",
        }
        data = await self._request_json("GET", self.geocoder_url, params=params)

        try:
            tracts = data["result"]["geographies"].get(TRACT_LAYER) or []
        except (KeyError, TypeError, AttributeError) as e:
            raise ParseFailure(self.source, f"unexpected geocoder response: {e}")

        if not tracts:
            raise SourceUnavailable(self.source, f"no census tract at ({lat}, {lon})")

        t = tracts[0]
        try:
            return TractInfo(
                geoid=str(t["GEOID"]),
                state=str(t["STATE"]),
                county=str(t["COUNTY"]),
                tract=str(t["TRACT"]),
                land_area_km2=float(t["AREALAND"]) / 1_000_000,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ParseFailure(self.source, f"malformed tract record: {e}")

    async def tract_population(self, tract: TractInfo) -> int:
        """
        조사구 총인구를 조회합니다.

        Args:
            tract: 조사구 정보

        Returns:
            인구
        """
        params = {
            "get": self.acs_variable,
            "for": f"tract:{tract.tract}",
            "in": f"state:{tract.state} county:{tract.county}",
        }
        if self.api_key:
            params["key"] = self.api_key

        rows = await self._request_json("GET", self.acs_url, params=params)

        # [[헤더...], [값, state, county, tract]]
        try:
            header, values = rows[0], rows[1]
            population = int(values[header.index(self.acs_variable)])
        except (IndexError, KeyError, TypeError, ValueError) as e:
            raise ParseFailure(self.source, f"unexpected ACS response: {e}")

        # ACS는 결측값을 음수 센티널로 표시함
        if population < 0:
            raise ParseFailure(self.source, f"ACS returned sentinel value {population}")

        return population
