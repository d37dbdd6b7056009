"""
Port interfaces for area impact analysis.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .population import PopulationSourcePort
from .buildings import BuildingSourcePort
from .narrative import NarrativePort

__all__ = ["PopulationSourcePort", "BuildingSourcePort", "NarrativePort"]
