"""
Error taxonomy for area impact analysis.

Validation errors (geometry, magnitude) are fatal to a single request.
Source errors are raised inside adapters and converted into failed
result records before they reach the aggregator.
"""


class AreaImpactError(Exception):
    """모든 도메인 예외의 기반 클래스"""


class InvalidGeometry(AreaImpactError):
    """폴리곤 점 부족 또는 퇴화된 경계 상자"""


class InvalidMagnitude(AreaImpactError):
    """허용 범위 [0, 10]을 벗어난 규모 값"""

    def __init__(self, magnitude: float):
        self.magnitude = magnitude
        super().__init__(f"magnitude must be within [0, 10], got {magnitude}")


class SourceError(AreaImpactError):
    """외부 데이터 소스 오류의 기반 클래스"""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class SourceUnavailable(SourceError):
    """네트워크 오류, 타임아웃 또는 비정상 HTTP 상태"""


class ParseFailure(SourceError):
    """외부 서비스가 예상하지 못한 형식의 데이터를 반환함"""
