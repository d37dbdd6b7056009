from .analyzer import AreaAnalyzer
from .service import AnalysisService, validate_request

__all__ = ["AreaAnalyzer", "AnalysisService", "validate_request"]
