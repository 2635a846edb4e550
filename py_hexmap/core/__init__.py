"""
Core map generation functionality.
"""

from .alea_prng import AleaPRNG
from .adjacency import UNREACHABLE, AdjacencyGraph
from .capitals import CapitalAssigner, Faction
from .context import MapContext, MapOptions
from .errors import (
    AdjacencyError,
    CapitalPlacementError,
    MapConfigurationError,
    MapGenerationError,
    ProvinceIdError,
)
from .models import MapCellData, ProvinceData, ProvinceTemplate, Scenario
from .naming import ProvinceNamer, load_province_names
from .scenario import ScenarioGenerator, generate_scenario

__all__ = ['AleaPRNG', 'UNREACHABLE', 'AdjacencyGraph', 'CapitalAssigner', 'Faction',
           'MapContext', 'MapOptions', 'AdjacencyError', 'CapitalPlacementError',
           'MapConfigurationError', 'MapGenerationError', 'ProvinceIdError',
           'MapCellData', 'ProvinceData', 'ProvinceTemplate', 'Scenario',
           'ProvinceNamer', 'load_province_names', 'ScenarioGenerator', 'generate_scenario']
