"""
Faction capital and strategic province assignment.

Process:
1. The world center (province #1) gets the center template
2. Each major faction gets a capital in its sector of the map, all at a
   common distance from the center when possible
3. Each faction gets a secondary province near both its capital and the center
4. Provinces bordering the center become outposts, spaced apart
5. Everything else becomes a random generic province
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import structlog

from .adjacency import UNREACHABLE, AdjacencyGraph
from .context import MapContext
from .errors import CapitalPlacementError, MapConfigurationError, MapGenerationError
from .hex_geometry import Cell
from .models import ProvinceData, ProvinceTemplate
from .naming import ProvinceNamer

logger = structlog.get_logger()


class Faction(str, Enum):
    """Major factions that start with a capital."""

    ORC = "orc"
    ELF = "elf"
    DWARF = "dwarf"


# Template pool layout
CENTER_TEMPLATE = 0
CAPITAL_TEMPLATES = {Faction.ORC: 1, Faction.ELF: 2, Faction.DWARF: 3}
SECONDARY_TEMPLATES = {Faction.ORC: 4, Faction.ELF: 5, Faction.DWARF: 6}
OUTPOST_TEMPLATE = 7
FIRST_GENERIC_TEMPLATE = 8


def faction_sector(center: Cell, world_center: Cell) -> Optional[Faction]:
    """
    Find the faction whose sector contains a province center.

    Orcs take the right half below the center row, dwarves the rest of the
    right half, elves a 90 degree wedge in the left half.
    """
    x, y = center
    cx, cy = world_center
    if x > cx:
        return Faction.ORC if y < cy else Faction.DWARF
    if abs(x - cx) > abs(y - cy):
        return Faction.ELF
    return None


@dataclass
class Assignment:
    """Provinces produced by the assigner plus the strategic picks."""

    provinces: Dict[int, ProvinceData] = field(default_factory=dict)
    capitals: Dict[Faction, int] = field(default_factory=dict)
    secondaries: Dict[Faction, int] = field(default_factory=dict)
    outposts: List[int] = field(default_factory=list)


class CapitalAssigner:
    """Assigns templates and names to every province of a repaired map."""

    def __init__(
        self,
        context: MapContext,
        templates: Sequence[ProvinceTemplate],
        namer: ProvinceNamer,
    ):
        """
        Initialize capital assigner.

        Args:
            context: Generation context with a built adjacency graph
            templates: Template pool, laid out as the *_TEMPLATE constants
            namer: Namer for outposts and generic provinces

        Raises:
            MapConfigurationError: If the pool lacks a generic template
        """
        if len(templates) <= FIRST_GENERIC_TEMPLATE:
            raise MapConfigurationError(
                f"Template pool needs at least {FIRST_GENERIC_TEMPLATE + 1} templates, "
                f"got {len(templates)}"
            )
        if context.graph is None:
            raise MapGenerationError("Adjacency graph must be built before assignment")

        self.context = context
        self.graph: AdjacencyGraph = context.graph
        self.templates = list(templates)
        self.namer = namer
        self.prng = context.prng
        self.legacy_selection = context.options.legacy_selection

    def assign(self) -> Assignment:
        """
        Assign a template to every province.

        Returns:
            Assignment with one ProvinceData per province id
        """
        result = Assignment()
        self._place(result, 1, CENTER_TEMPLATE, keep_name=True)

        pools = self.candidate_pools()
        target = self.target_distance(pools)
        logger.info(f"Faction capitals will be {target} provinces from the center")

        for faction in Faction:
            province_id = self.choose_capital(faction, pools[faction], target)
            result.capitals[faction] = province_id
            self._place(result, province_id, CAPITAL_TEMPLATES[faction], keep_name=True)
            logger.info(f"The {faction.value} capital is province #{province_id}")

        for faction in Faction:
            province_id = self.choose_secondary(
                pools[faction], result.capitals[faction], result.provinces
            )
            if province_id is None:
                logger.warning(f"No secondary province found for the {faction.value} faction")
                continue
            result.secondaries[faction] = province_id
            self._place(result, province_id, SECONDARY_TEMPLATES[faction], keep_name=True)

        self.place_outposts(result)
        self.fill_generic(result)
        return result

    def _place(
        self, result: Assignment, province_id: int, template_index: int, keep_name: bool
    ) -> ProvinceData:
        province = self.templates[template_index].clone_as(province_id)
        if keep_name:
            self.namer.reserve(province.name)
        else:
            province.name = self.namer.create_name(province_id)
        result.provinces[province_id] = province
        return province

    def candidate_pools(self) -> Dict[Faction, List[int]]:
        """
        Group provinces by faction sector.

        Only provinces more than one step from the center and reachable from it
        are candidates.
        """
        pools: Dict[Faction, List[int]] = {faction: [] for faction in Faction}
        world_center = self.context.world_center
        for province_id in self.context.provinces.ids():
            distance = self.graph.distance(1, province_id)
            if distance <= 1 or distance >= UNREACHABLE:
                continue
            center = self.context.provinces[province_id].center
            faction = faction_sector(center, world_center)
            if faction is not None:
                pools[faction].append(province_id)
        return pools

    def target_distance(self, pools: Dict[Faction, List[int]]) -> int:
        """
        Largest distance from the center at which every faction has a candidate.

        Raises:
            CapitalPlacementError: If some faction has no candidates at all
        """
        farthest = []
        for faction, pool in pools.items():
            if not pool:
                raise CapitalPlacementError(
                    f"No capital candidates for the {faction.value} faction"
                )
            farthest.append(max(self.graph.distance(1, p) for p in pool))
        return min(farthest)

    def choose_capital(self, faction: Faction, pool: List[int], target: int) -> int:
        """
        Pick a faction capital from its pool.

        Candidates exactly at the target distance are preferred, then farther
        ones. Ties go to the most outlying province of the sector.

        Raises:
            CapitalPlacementError: If no candidate is at or beyond the target
        """
        candidates = [p for p in pool if self.graph.distance(1, p) == target]
        if not candidates:
            candidates = [p for p in pool if self.graph.distance(1, p) > target]
        if not candidates:
            raise CapitalPlacementError(
                f"No {faction.value} capital candidate at distance {target} or more"
            )

        def center(province_id: int) -> Cell:
            return self.context.provinces[province_id].center

        if faction is Faction.ORC:
            return max(candidates, key=lambda p: abs(center(p)[0] - center(p)[1]))
        if faction is Faction.ELF:
            return min(candidates, key=lambda p: center(p)[0])
        return max(candidates, key=lambda p: center(p)[0] + center(p)[1])

    def choose_secondary(
        self, pool: List[int], capital: int, taken: Dict[int, ProvinceData]
    ) -> Optional[int]:
        """
        Pick a secondary province two steps from both the center and the capital.

        Falls back to any pool province at least two steps from the capital.

        Returns:
            Province id, or None if no candidate exists
        """
        free = [p for p in pool if p not in taken]
        candidates = [
            p
            for p in free
            if self.graph.distance(1, p) == 2 and self.graph.distance(capital, p) == 2
        ]
        if not candidates:
            candidates = [
                p
                for p in free
                if self.graph.distance(1, p) >= 1 and self.graph.distance(capital, p) >= 2
            ]
        if not candidates:
            return None

        if self.legacy_selection:
            return candidates[self.prng.legacy_index(len(candidates))]
        return candidates[self.prng.pick_index(len(candidates))]

    def place_outposts(self, result: Assignment) -> None:
        """Turn free provinces bordering the center into spaced-out outposts."""
        candidates = [
            p
            for p in self.context.provinces.ids()
            if p != 1 and p not in result.provinces and self.graph.distance(1, p) == 1
        ]
        while candidates:
            province_id = candidates[0]
            self._place(result, province_id, OUTPOST_TEMPLATE, keep_name=False)
            result.outposts.append(province_id)
            candidates = [
                p for p in candidates if self.graph.distance(p, province_id) >= 2
            ]
        logger.info(f"Placed {len(result.outposts)} outposts around the center")

    def fill_generic(self, result: Assignment) -> None:
        """Give every remaining province a random generic template and a name."""
        for province_id in self.context.provinces.ids():
            if province_id in result.provinces:
                continue
            template_index = self.prng.uniform_int(
                FIRST_GENERIC_TEMPLATE, len(self.templates)
            )
            self._place(result, province_id, template_index, keep_name=False)
