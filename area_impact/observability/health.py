"""
HTTP boundary for area impact analysis.

Exposes the analyze endpoint that hands map requests to the service,
together with liveness, readiness, metrics and info endpoints for
operators.
"""

import time
from typing import Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError

from area_impact.core.errors import InvalidGeometry, InvalidMagnitude
from area_impact.core.models import AnalysisRequest
from area_impact.orchestrators.service import AnalysisService
from area_impact.settings import Settings
from area_impact.observability.logging_setup import get_logger

log = get_logger("area_impact.http_app")

ENDPOINTS = {
    "analyze": "/analyze",
    "health": "/health",
    "ready": "/ready",
    "metrics": "/metrics",
    "info": "/info",
}


def _source_names(service: Optional[AnalysisService]) -> dict:
    analyzer = getattr(service, "analyzer", None)
    return {
        "population": getattr(getattr(analyzer, "population_source", None), "name", None),
        "buildings": getattr(getattr(analyzer, "building_source", None), "name", None),
    }


def create_app(settings: Settings, service: Optional[AnalysisService] = None) -> FastAPI:
    """
    FastAPI 애플리케이션을 생성합니다.

    Args:
        settings: 서비스 설정
        service: 분석 서비스 (없으면 /analyze와 /ready는 503)

    Returns:
        FastAPI 애플리케이션
    """
    obs = settings.observability
    app = FastAPI(
        title=obs.service_name,
        version=obs.build_version,
        description="Hazard area population and building exposure analysis"
    )

    started_at = time.time()

    def _unavailable():
        return HTTPException(status_code=503, detail="analysis service not configured")

    @app.post("/analyze")
    async def analyze(payload: dict = Body(...)):
        """지도에서 그린 영역을 분석하여 보고서를 반환합니다."""
        if service is None:
            raise _unavailable()

        try:
            request = AnalysisRequest.model_validate(payload)
            report = await service.run(request)
        except (InvalidGeometry, InvalidMagnitude) as e:
            log.warning(f"분석 요청 거부 error:{e}")
            raise HTTPException(status_code=400, detail=str(e))
        except ValidationError as e:
            log.warning(f"분석 요청 형식 오류 errors:{e.error_count()}")
            raise HTTPException(status_code=400, detail="Missing or malformed required fields")

        return JSONResponse(report.model_dump(mode="json"))

    @app.get("/health")
    async def health():
        """프로세스 생존 확인"""
        return JSONResponse({"status": "ok", "service": obs.service_name, "timestamp": time.time()})

    @app.get("/ready")
    async def ready():
        """분석 서비스와 소스 구성 확인"""
        if service is None:
            raise _unavailable()
        return JSONResponse({
            "status": "ready",
            "population_strategy": settings.population.strategy,
            "sources": _source_names(service),
        })

    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭"""
        if not obs.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/info")
    async def info():
        """빌드 및 구성 정보"""
        return JSONResponse({
            "service": obs.service_name,
            "version": obs.build_version,
            "uptime_seconds": int(time.time() - started_at),
            "metrics_enabled": obs.metrics_enabled,
            "population_strategy": settings.population.strategy,
            "overpass_url": settings.overpass.base_url,
            "source_timeout_sec": settings.aggregation.source_timeout_sec,
        })

    @app.get("/")
    async def root():
        return JSONResponse({"service": obs.service_name, "endpoints": ENDPOINTS})

    return app
