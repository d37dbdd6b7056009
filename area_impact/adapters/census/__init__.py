from .client import CensusClient, TractInfo
from .population import CensusTractPopulationSource

__all__ = ["CensusClient", "TractInfo", "CensusTractPopulationSource"]
