"""
Analysis request pipeline.

Validates the inbound request, runs the aggregator and assembles the
report. Geometry and magnitude problems fail fast before any network
call is made.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from area_impact.core.errors import InvalidGeometry, InvalidMagnitude
from area_impact.core.geometry import compute_bounding_box, count_distinct_points, validate_coordinates
from area_impact.core.models import AnalysisRequest, BoundingBox, Report, SeverityTier
from area_impact.core.report import assemble
from area_impact.core.severity import classify
from area_impact.orchestrators.analyzer import AreaAnalyzer
from area_impact.ports.narrative import NarrativePort
from area_impact.observability import metrics
from area_impact.observability.logging_setup import get_logger, request_context

log = get_logger("area_impact.service")

MIN_POLYGON_POINTS = 3


def validate_request(request: AnalysisRequest) -> Tuple[SeverityTier, BoundingBox]:
    """
    요청을 검증하고 심각도와 경계 상자를 반환합니다.

    Args:
        request: 분석 요청

    Returns:
        (심각도 등급, 경계 상자)

    Raises:
        InvalidMagnitude: 규모가 범위를 벗어난 경우
        InvalidGeometry: 폴리곤 점 부족, 좌표 범위 오류, 퇴화된 경계 상자
    """
    try:
        severity = classify(request.magnitude)
    except InvalidMagnitude:
        metrics.rejected_requests.labels(reason="magnitude").inc()
        raise

    try:
        polygon = request.polygon_coordinates
        if count_distinct_points(polygon) < MIN_POLYGON_POINTS:
            raise InvalidGeometry(
                f"polygon needs at least {MIN_POLYGON_POINTS} distinct points, "
                f"got {count_distinct_points(polygon)}"
            )
        for lon, lat in polygon:
            if not validate_coordinates(lat, lon):
                raise InvalidGeometry(f"vertex out of range: ({lon}, {lat})")

        bbox = request.bounding_box or compute_bounding_box(polygon)
        if bbox is None:
            raise InvalidGeometry("empty polygon")
    except InvalidGeometry:
        metrics.rejected_requests.labels(reason="geometry").inc()
        raise

    return severity, bbox


class AnalysisService:
    """분석 요청 처리 서비스"""

    def __init__(self, analyzer: AreaAnalyzer, *, narrator: Optional[NarrativePort] = None):
        self.analyzer = analyzer
        self.narrator = narrator

    async def run(self, request: AnalysisRequest) -> Report:
        """
        요청을 검증하고 영역을 분석하여 보고서를 생성합니다.

        Args:
            request: 분석 요청

        Returns:
            보고서
        """
        with request_context(uuid.uuid4().hex[:12]):
            severity, bbox = validate_request(request)
            log.info(f"분석 요청 수신 place:{request.place_name} severity:{severity.value} "
                     f"vertices:{len(request.polygon_coordinates)}")

            analysis = await self.analyzer.analyze(bbox)

            report = assemble(
                analysis,
                severity,
                request.place_name,
                request.magnitude,
                polygon=request.polygon_coordinates,
                center=request.center,
                fetched_at=datetime.now(timezone.utc),
            )

            if self.narrator is not None:
                report.narrative = await self._narrate(report)

        return report

    async def _narrate(self, report: Report) -> Optional[str]:
        try:
            return await self.narrator.narrate(report)
        except Exception as e:
            log.error(f"서술 생성 실패, 보고서만 반환 error:{e}")
            return None
