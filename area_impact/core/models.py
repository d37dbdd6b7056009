"""
Core domain models for area impact analysis.

This module defines the request-scoped value objects using Pydantic v2
for type safety and validation. None of them outlive the request that
created them.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, model_validator

from .errors import InvalidGeometry

# (경도, 위도) 순서
Coordinate = Tuple[float, float]
Polygon = List[Coordinate]

PopulationMethod = Literal[
    "overpass_place_tags",
    "census_tract_area_weighted",
    "flat_density_fallback",
    "unavailable",
]
BuildingMethod = Literal["overpass_building_tags", "unavailable"]
SourceStatus = Literal["live", "fallback", "unavailable"]


class BoundingBox(BaseModel):
    """경도/위도 축 정렬 경계 상자 (도 단위)"""
    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @model_validator(mode="after")
    def _check_canonical(self) -> "BoundingBox":
        if not (-90 <= self.south <= 90 and -90 <= self.north <= 90):
            raise InvalidGeometry(f"latitude out of range: south={self.south}, north={self.north}")
        if not (-180 <= self.west <= 180 and -180 <= self.east <= 180):
            raise InvalidGeometry(f"longitude out of range: west={self.west}, east={self.east}")
        if self.south >= self.north or self.west >= self.east:
            raise InvalidGeometry(
                f"degenerate bounding box: south={self.south}, west={self.west}, "
                f"north={self.north}, east={self.east}"
            )
        return self

    @property
    def center(self) -> Coordinate:
        """경계 상자 중심 (경도, 위도)"""
        return ((self.west + self.east) / 2, (self.south + self.north) / 2)


class PlaceRecord(BaseModel):
    """인구 태그가 있는 지점"""
    name: Optional[str] = None
    population: int = Field(default=0, ge=0)
    lat: float
    lon: float


class PopulationResult(BaseModel):
    """인구 소스 조회 결과"""
    bbox: Optional[BoundingBox] = None
    total_population: int = Field(default=0, ge=0)
    places: List[PlaceRecord] = Field(default_factory=list)
    area_km2: float = Field(default=0.0, ge=0)
    density_per_km2: float = Field(default=0.0, ge=0)
    estimation_method: PopulationMethod = "overpass_place_tags"
    success: bool = True
    error_detail: Optional[str] = None

    @computed_field
    @property
    def places_count(self) -> int:
        return len(self.places)

    @classmethod
    def failed(cls, error_detail: str, *, bbox: Optional[BoundingBox] = None) -> "PopulationResult":
        """값이 비워진 실패 결과를 생성합니다."""
        return cls(
            bbox=bbox,
            estimation_method="unavailable",
            success=False,
            error_detail=error_detail,
        )


class BuildingSummary(BaseModel):
    """건물/시설 요약 버킷"""
    residential: int = 0
    commercial: int = 0
    educational: int = 0
    healthcare: int = 0
    emergency_services: int = 0
    infrastructure: int = 0
    density_per_km2: float = 0.0


class BuildingResult(BaseModel):
    """건물 및 편의시설 소스 조회 결과"""
    bbox: Optional[BoundingBox] = None
    area_km2: float = Field(default=0.0, ge=0)
    total_buildings: int = Field(default=0, ge=0)
    generic_buildings: int = Field(default=0, ge=0)
    specific_buildings_count: int = Field(default=0, ge=0)
    building_type_counts: Dict[str, int] = Field(default_factory=dict)
    specific_building_types: Dict[str, int] = Field(default_factory=dict)
    service_type_counts: Dict[str, int] = Field(default_factory=dict)
    summary: BuildingSummary = Field(default_factory=BuildingSummary)
    estimation_method: BuildingMethod = "overpass_building_tags"
    success: bool = True
    error_detail: Optional[str] = None

    @classmethod
    def failed(cls, error_detail: str, *, bbox: Optional[BoundingBox] = None) -> "BuildingResult":
        """카운트가 0으로 채워진 실패 결과를 생성합니다."""
        return cls(
            bbox=bbox,
            estimation_method="unavailable",
            success=False,
            error_detail=error_detail,
        )


class CriticalFacilities(BaseModel):
    hospitals: int = 0
    schools: int = 0
    fire_stations: int = 0
    police_stations: int = 0


class AreaSummary(BaseModel):
    """인구와 건물 데이터를 교차 참조한 요약"""
    area_km2: float
    total_population: int
    population_density: float
    total_buildings: int
    building_density: float
    critical_facilities: CriticalFacilities
    residential_buildings: int
    estimated_affected_people: float
    population_data_points: int
    building_data_coverage: Literal["Good", "Limited"]
    success: bool


class AreaAnalysis(BaseModel):
    """영역 분석 집계 결과"""
    bbox: BoundingBox
    population: PopulationResult
    buildings: BuildingResult
    summary: AreaSummary

    @property
    def success(self) -> bool:
        return self.summary.success


class SeverityTier(str, Enum):
    """규모에서 파생된 심각도 등급"""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    SEVERE = "SEVERE"
    CRITICAL = "CRITICAL"

    @property
    def color(self) -> str:
        return _TIER_STYLE[self][0]

    @property
    def description(self) -> str:
        return _TIER_STYLE[self][1]


_TIER_STYLE = {
    SeverityTier.LOW: ("green", "Minor incident"),
    SeverityTier.MODERATE: ("yellow", "Notable concern"),
    SeverityTier.HIGH: ("orange", "Serious threat"),
    SeverityTier.SEVERE: ("red", "Major catastrophe"),
    SeverityTier.CRITICAL: ("darkred", "Extreme disaster"),
}


class DataSourceStatus(BaseModel):
    """데이터 범주별 신뢰도 표시"""
    status: SourceStatus
    method: str
    error_detail: Optional[str] = None


class ReportMetadata(BaseModel):
    magnitude: float
    severity: SeverityTier
    severity_description: str
    severity_color: str
    area_size_km2: float
    area_type: str
    bounding_box: BoundingBox
    center: Coordinate
    location: str
    vertex_count: int
    data_fetch_timestamp: datetime


class Report(BaseModel):
    """표현 계층과 서술 생성 단계로 전달되는 최종 보고서"""
    success: bool
    place_name: Optional[str] = None
    analysis: AreaAnalysis
    metadata: ReportMetadata
    data_sources: Dict[str, DataSourceStatus]
    narrative: Optional[str] = None


class AnalysisRequest(BaseModel):
    """지도 UI에서 들어오는 분석 요청"""
    polygon_coordinates: Polygon = Field(
        validation_alias=AliasChoices("polygonCoordinates", "polygon_coordinates", "coordinates")
    )
    magnitude: float
    center: Optional[Coordinate] = None
    place_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("placeName", "place_name")
    )
    bounding_box: Optional[BoundingBox] = Field(
        default=None, validation_alias=AliasChoices("boundingBox", "bounding_box")
    )
