from .client import OverpassClient
from .population import OverpassPopulationSource
from .buildings import OverpassBuildingSource

__all__ = ["OverpassClient", "OverpassPopulationSource", "OverpassBuildingSource"]
