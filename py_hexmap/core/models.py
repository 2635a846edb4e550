"""
Pydantic models for province templates and generated scenario data.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .errors import ProvinceIdError


class UnitData(BaseModel):
    """A stack of units of one type."""

    id: int = Field(description="Unit type id")
    qty: int = Field(default=1, ge=0, description="Number of units")


class TrainingOrderData(BaseModel):
    """A training order queued in a province."""

    id: int = Field(description="Unit type id")
    qty: int = Field(default=1, ge=0, description="Number of units to train")
    standing: bool = Field(default=False, description="Whether the order repeats")


class ProvinceTemplate(BaseModel):
    """Archetype blueprint a generated province is cloned from."""

    name: str = Field(description="Province name, replaced for generated provinces")
    income: int = Field(default=0, description="Base income per turn")
    manpower: int = Field(default=0, description="Base manpower per turn")
    favor: int = Field(default=0, description="Base favor per turn")
    race_id: int = Field(default=0, description="Race of the dwellers")
    faction_id: int = Field(default=0, description="Owning faction")
    trainable: List[int] = Field(
        default_factory=list, description="Unit type ids trainable here"
    )
    units: List[UnitData] = Field(default_factory=list, description="Garrison")
    training: List[TrainingOrderData] = Field(
        default_factory=list, description="Queued training orders"
    )

    def clone_as(self, province_id: int) -> "ProvinceData":
        """Create an independent province record from this template."""
        return ProvinceData(id=province_id, **self.model_dump())


class ProvinceData(ProvinceTemplate):
    """A generated province."""

    id: int = Field(description="Province id, 1..N")
    distances: List[int] = Field(
        default_factory=list,
        description="Distance in provinces to every province, in id order",
    )


class MapCellData(BaseModel):
    """A land cell of the generated map."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    province_id: int
    center: bool = False


class Scenario(BaseModel):
    """Result of one map generation run."""

    seed: str = Field(description="Seed the run was generated from")
    width: int
    height: int
    desired_province_count: int = Field(
        description="Province count estimated before placement"
    )
    provinces: List[ProvinceData] = Field(description="Provinces in ascending id order")
    cells: List[MapCellData] = Field(description="Land cells; water is not emitted")
    capitals: Dict[str, int] = Field(
        default_factory=dict, description="Faction name to capital province id"
    )
    secondaries: Dict[str, int] = Field(
        default_factory=dict, description="Faction name to secondary province id"
    )
    outposts: List[int] = Field(default_factory=list, description="Border outpost ids")
    unreachable_provinces: List[int] = Field(
        default_factory=list,
        description="Provinces with no path to province #1",
    )

    @property
    def province_count(self) -> int:
        return len(self.provinces)

    def get_province(self, province_id: int) -> ProvinceData:
        """
        Look up a province by id.

        Raises:
            ProvinceIdError: If the id is outside [1, province_count]
        """
        if not 1 <= province_id <= len(self.provinces):
            raise ProvinceIdError(province_id, len(self.provinces))
        return self.provinces[province_id - 1]
