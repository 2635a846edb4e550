"""
Scenario generation pipeline.

One call builds a complete map from scratch:
1. CenterPlacer - province centers on the coarse grid
2. GrowthEngine - provinces grown to their target sizes
3. AdjacencyGraph - borders and all-pairs province distances
4. TopologyRepair - islands connected, ocean deepened, lakes dried
5. CapitalAssigner - faction capitals, secondaries, outposts, generic provinces

All working state lives in a fresh MapContext and is dropped once the scenario
is emitted.
"""

from typing import Optional, Sequence, Union

import structlog

from .adjacency import AdjacencyGraph
from .alea_prng import AleaPRNG
from .capitals import CapitalAssigner
from .context import MapContext, MapOptions
from .errors import MapConfigurationError
from .growth import GrowthEngine
from .models import MapCellData, ProvinceTemplate, Scenario
from .naming import ProvinceNamer, load_province_names
from .placement import CenterPlacer
from .topology import TopologyRepair

logger = structlog.get_logger()


class ScenarioGenerator:
    """Generates province maps and their starting assignments."""

    def __init__(
        self,
        templates: Sequence[ProvinceTemplate],
        names: Optional[Sequence[str]] = None,
        options: Optional[MapOptions] = None,
    ):
        """
        Initialize scenario generator.

        Args:
            templates: Province template pool
            names: Candidate province names, defaults to the packaged list
            options: Map generation options
        """
        self.templates = list(templates)
        self.names = list(names) if names is not None else load_province_names()
        self.options = options or MapOptions()

    def generate(self, seed: Union[str, int, AleaPRNG] = "default") -> Scenario:
        """
        Generate one scenario.

        Args:
            seed: Seed string or number, or a ready PRNG to draw from

        Returns:
            Scenario with provinces in id order and land cells
        """
        prng = seed if isinstance(seed, AleaPRNG) else AleaPRNG(seed)
        logger.info(
            "Starting scenario generation",
            seed=str(prng.seed),
            width=self.options.width,
            height=self.options.height,
        )

        context = MapContext.create(self.options, prng)

        CenterPlacer(context).place()
        if len(context.provinces) == 0:
            raise MapConfigurationError("Map is too small to place any province")

        GrowthEngine(context).grow()

        context.graph = AdjacencyGraph.from_cell_map(
            context.cell_map, context.bounds, len(context.provinces)
        )
        report = TopologyRepair(context).repair()
        context.graph.validate()

        namer = ProvinceNamer(self.names, prng)
        assignment = CapitalAssigner(context, self.templates, namer).assign()

        provinces = []
        for province_id in context.provinces.ids():
            province = assignment.provinces[province_id]
            province.distances = context.graph.distances_from(province_id)
            provinces.append(province)

        scenario = Scenario(
            seed=str(prng.seed),
            width=self.options.width,
            height=self.options.height,
            desired_province_count=context.desired_provinces,
            provinces=provinces,
            cells=self._emit_cells(context),
            capitals={f.value: p for f, p in assignment.capitals.items()},
            secondaries={f.value: p for f, p in assignment.secondaries.items()},
            outposts=assignment.outposts,
            unreachable_provinces=report.remaining_islands,
        )
        logger.info(
            f"Generated {scenario.province_count} provinces over {len(scenario.cells)} cells"
        )
        return scenario

    @staticmethod
    def _emit_cells(context: MapContext):
        centers = {seed.center for seed in context.provinces}
        cell_map = context.cell_map
        return [
            MapCellData(
                x=x, y=y, province_id=int(cell_map[x, y]), center=(x, y) in centers
            )
            for x, y in context.bounds.cells()
            if cell_map[x, y] > 0
        ]


def generate_scenario(
    templates: Sequence[ProvinceTemplate],
    names: Optional[Sequence[str]] = None,
    options: Optional[MapOptions] = None,
    seed: Union[str, int, AleaPRNG] = "default",
) -> Scenario:
    """Convenience wrapper around ScenarioGenerator.generate()."""
    return ScenarioGenerator(templates, names, options).generate(seed)
