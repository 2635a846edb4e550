"""
Generation context threaded through every map generation phase.

A ``MapContext`` owns all working buffers of one generation run: the fine cell
map, the coarse placement map, the province arena and (once built) the
adjacency graph. Each phase object receives the context, reads what earlier
phases produced and mutates it in place. A new run always starts from a new
context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .alea_prng import AleaPRNG
from .cell_map import WATER, Bounds, Frontier
from .errors import ProvinceIdError
from .hex_geometry import Cell

if TYPE_CHECKING:
    from .adjacency import AdjacencyGraph


class MapOptions(BaseModel):
    """Map generation parameters."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=48, ge=8, description="Grid width in cells")
    height: int = Field(default=42, ge=8, description="Grid height in cells")
    radius: int = Field(
        default=3,
        ge=1,
        description="All cells within this radius of a center should ideally share its province",
    )
    land_fraction: float = Field(
        default=0.6, gt=0.0, le=1.0, description="Target share of land cells"
    )
    cells_per_province: Optional[int] = Field(
        default=None,
        ge=1,
        description="Override for the nominal province size (defaults to a hex of the radius)",
    )
    max_placement_failures: int = Field(
        default=10, ge=1, description="Consecutive failed center placements before giving up"
    )
    center_jitter: int = Field(
        default=2, ge=0, description="Max per-axis offset added to projected centers"
    )
    edge_margin_factor: int = Field(
        default=3,
        ge=0,
        description="Centers farther than this many radii from every edge grow larger",
    )
    island_connections: int = Field(
        default=3, ge=1, description="Connecting claims made for each island province"
    )
    legacy_selection: bool = Field(
        default=True,
        description="Draw secondary provinces from [0, count - 1) like earlier releases",
    )

    @property
    def nominal_province_size(self) -> int:
        """Cells in a province of the configured radius."""
        if self.cells_per_province is not None:
            return self.cells_per_province
        return 3 * self.radius * (self.radius + 1) + 1

    @property
    def coarse_shape(self) -> tuple:
        """Dimensions of the coarse placement grid."""
        return (
            max(int(self.width * 0.5 / self.radius), 1),
            max(int(self.height * 0.5 / self.radius), 1),
        )


@dataclass
class ProvinceSeed:
    """Generation-time province record."""

    id: int
    center: Cell
    frontier: Frontier = field(default_factory=Frontier)
    cell_count: int = 1
    target_cells: int = 0

    @property
    def is_complete(self) -> bool:
        return self.cell_count >= self.target_cells


class ProvinceArena:
    """Province records addressed by 1-based id with bounds checking."""

    def __init__(self) -> None:
        self._records: List[ProvinceSeed] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProvinceSeed]:
        return iter(self._records)

    def __getitem__(self, province_id: int) -> ProvinceSeed:
        return self._records[self.index_of(province_id)]

    def index_of(self, province_id: int) -> int:
        """Convert a province id to its 0-based array index."""
        if not 1 <= province_id <= len(self._records):
            raise ProvinceIdError(province_id, len(self._records))
        return province_id - 1

    def create(self, center: Cell) -> ProvinceSeed:
        """Append a record for the next id."""
        seed = ProvinceSeed(id=len(self._records) + 1, center=center)
        self._records.append(seed)
        return seed

    def ids(self) -> range:
        return range(1, len(self._records) + 1)


@dataclass
class MapContext:
    """Mutable state of one generation run."""

    options: MapOptions
    prng: AleaPRNG
    cell_map: np.ndarray
    coarse_map: np.ndarray
    provinces: ProvinceArena = field(default_factory=ProvinceArena)
    coarse_frontier: Frontier = field(default_factory=Frontier)
    desired_provinces: int = 0
    graph: Optional["AdjacencyGraph"] = None

    @classmethod
    def create(cls, options: MapOptions, prng: AleaPRNG) -> "MapContext":
        """Allocate fresh buffers for a run."""
        return cls(
            options=options,
            prng=prng,
            cell_map=np.full((options.width, options.height), WATER, dtype=np.int32),
            coarse_map=np.full(options.coarse_shape, WATER, dtype=np.int32),
        )

    @property
    def width(self) -> int:
        return self.options.width

    @property
    def height(self) -> int:
        return self.options.height

    @property
    def bounds(self) -> Bounds:
        return Bounds.playable(self.width, self.height)

    @property
    def coarse_bounds(self) -> Bounds:
        return Bounds.coarse(*self.coarse_map.shape)

    @property
    def world_center(self) -> Cell:
        """Center cell of province #1."""
        return self.provinces[1].center

    def owner_of(self, x: int, y: int) -> int:
        return int(self.cell_map[x, y])
