"""
Adapters for area impact analysis.

This module contains the concrete implementations of port interfaces
that handle external I/O against third-party geographic services.
"""

from .http import JsonHttpClient
from .overpass import OverpassClient, OverpassPopulationSource, OverpassBuildingSource
from .census import CensusClient, CensusTractPopulationSource

__all__ = [
    "JsonHttpClient", "OverpassClient", "OverpassPopulationSource",
    "OverpassBuildingSource", "CensusClient", "CensusTractPopulationSource",
]
