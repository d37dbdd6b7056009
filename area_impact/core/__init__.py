"""
Core domain models and pure functions for area impact analysis.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    AnalysisRequest, AreaAnalysis, AreaSummary, BoundingBox, BuildingResult,
    BuildingSummary, PlaceRecord, PopulationResult, Report, SeverityTier,
)
from .errors import (
    AreaImpactError, InvalidGeometry, InvalidMagnitude, ParseFailure,
    SourceError, SourceUnavailable,
)
from .severity import classify
from .aggregate import merge_analysis
from .report import assemble

__all__ = [
    "AnalysisRequest", "AreaAnalysis", "AreaSummary", "BoundingBox", "BuildingResult",
    "BuildingSummary", "PlaceRecord", "PopulationResult", "Report", "SeverityTier",
    "AreaImpactError", "InvalidGeometry", "InvalidMagnitude", "ParseFailure",
    "SourceError", "SourceUnavailable", "classify", "merge_analysis", "assemble",
]
