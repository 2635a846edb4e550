"""
Integration tests for the full scenario pipeline.

Maps are 72x60 so every faction sector holds several candidate provinces.
"""

import pytest

from py_hexmap.config import get_templates
from py_hexmap.core import UNREACHABLE, MapOptions, ScenarioGenerator, generate_scenario
from py_hexmap.core.capitals import Faction, faction_sector
from py_hexmap.core.errors import (
    CapitalPlacementError,
    MapConfigurationError,
    ProvinceIdError,
)


@pytest.fixture(scope="module")
def options():
    return MapOptions(width=72, height=60)


@pytest.fixture(scope="module")
def generator(options):
    return ScenarioGenerator(get_templates("classic"), options=options)


@pytest.fixture(scope="module", params=["alpha", "bravo"])
def scenario(request, generator):
    return generator.generate(request.param)


class TestScenarioStructure:
    """Test the shape of a generated scenario."""

    def test_province_ids(self, scenario):
        """Test provinces are listed in ascending id order."""
        ids = [p.id for p in scenario.provinces]
        assert ids == list(range(1, scenario.province_count + 1))
        assert scenario.province_count <= scenario.desired_province_count

    def test_cells(self, scenario):
        """Test every emitted cell is unique, in the playable area and owned."""
        n = scenario.province_count
        coords = [(c.x, c.y) for c in scenario.cells]
        assert len(coords) == len(set(coords))
        for cell in scenario.cells:
            assert 1 <= cell.province_id <= n
            assert 1 <= cell.x < scenario.width - 1
            assert 1 <= cell.y < scenario.height - 1
        assert {c.province_id for c in scenario.cells} == set(range(1, n + 1))

    def test_one_center_per_province(self, scenario):
        """Test exactly one cell per province carries the center flag."""
        centers = [c.province_id for c in scenario.cells if c.center]
        assert sorted(centers) == list(range(1, scenario.province_count + 1))

    def test_distance_matrix(self, scenario):
        """Test distances are symmetric, zero on the diagonal and metric."""
        n = scenario.province_count
        matrix = [p.distances for p in scenario.provinces]
        for i in range(n):
            assert len(matrix[i]) == n
            assert matrix[i][i] == 0
            for j in range(n):
                assert matrix[i][j] == matrix[j][i]
                assert matrix[i][j] >= 0

        for k in range(n):
            for i in range(n):
                if matrix[i][k] >= UNREACHABLE:
                    continue
                for j in range(n):
                    if matrix[k][j] < UNREACHABLE:
                        assert matrix[i][j] <= matrix[i][k] + matrix[k][j]

    def test_unreachable_list(self, scenario):
        """Test the unreachable list matches the center's distance row."""
        from_center = scenario.get_province(1).distances
        expected = [i + 1 for i, d in enumerate(from_center) if d >= UNREACHABLE]
        assert scenario.unreachable_provinces == expected


class TestGetProvince:
    """Test province lookup by id."""

    def test_valid_ids(self, scenario):
        """Test the first and last ids resolve to their provinces."""
        assert scenario.get_province(1).id == 1
        last = scenario.province_count
        assert scenario.get_province(last).id == last

    def test_out_of_range_ids(self, scenario):
        """Test ids outside [1, N] raise instead of wrapping around."""
        n = scenario.province_count
        for bad_id in (0, -1, n + 1):
            with pytest.raises(ProvinceIdError) as exc_info:
                scenario.get_province(bad_id)
            assert exc_info.value.province_id == bad_id
            assert exc_info.value.province_count == n

    def test_out_of_range_is_index_error(self, scenario):
        """Test lookups fail like sequence indexing does."""
        with pytest.raises(IndexError):
            scenario.get_province(0)


class TestScenarioAssignment:
    """Test capitals, secondaries and names."""

    def test_world_center_template(self, scenario):
        """Test province 1 keeps the center template name."""
        assert scenario.get_province(1).name == "Utopia"

    def test_capitals_in_sectors(self, scenario):
        """Test every capital lies in its faction sector beyond the center ring."""
        centers = {c.province_id: (c.x, c.y) for c in scenario.cells if c.center}
        assert set(scenario.capitals) == {"orc", "elf", "dwarf"}
        for faction, province_id in scenario.capitals.items():
            assert faction_sector(centers[province_id], centers[1]) is Faction(faction)
            assert scenario.get_province(1).distances[province_id - 1] > 1

    def test_strategic_provinces_distinct(self, scenario):
        """Test no province holds two strategic roles."""
        picked = (
            [1]
            + list(scenario.capitals.values())
            + list(scenario.secondaries.values())
            + scenario.outposts
        )
        assert len(picked) == len(set(picked))

    def test_outposts_border_center(self, scenario):
        """Test outposts touch the center and not each other."""
        center_row = scenario.get_province(1).distances
        for outpost in scenario.outposts:
            assert center_row[outpost - 1] == 1
        for first in scenario.outposts:
            for second in scenario.outposts:
                if first != second:
                    assert scenario.get_province(first).distances[second - 1] >= 2

    def test_names_unique(self, scenario):
        """Test no two provinces share a name."""
        names = [p.name for p in scenario.provinces]
        assert len(names) == len(set(names))


class TestSmallMaps:
    """Test maps too small for the faction layout."""

    def test_single_province_map(self):
        """Test a map holding one province cannot place capitals."""
        options = MapOptions(width=16, height=16)
        with pytest.raises(CapitalPlacementError):
            generate_scenario(get_templates("classic"), options=options, seed="tiny")

    def test_capital_error_is_configuration_error(self):
        """Test missing capitals are reported as a configuration mismatch."""
        options = MapOptions(width=16, height=16)
        with pytest.raises(MapConfigurationError):
            generate_scenario(get_templates("classic"), options=options, seed="tiny")


class TestDeterminism:
    """Test seeded reproducibility."""

    def test_same_seed(self, options):
        """Test the same seed reproduces the same scenario."""
        templates = get_templates("classic")
        first = generate_scenario(templates, options=options, seed="repeat")
        second = generate_scenario(templates, options=options, seed="repeat")
        assert first.model_dump() == second.model_dump()

    def test_different_seeds(self, options):
        """Test different seeds produce different maps."""
        templates = get_templates("classic")
        first = generate_scenario(templates, options=options, seed="one")
        second = generate_scenario(templates, options=options, seed="two")
        assert first.cells != second.cells

    def test_seed_recorded(self, generator):
        """Test numeric seeds are recorded as strings."""
        assert generator.generate(42).seed == "42"

    def test_json_round_trip(self, scenario):
        """Test a scenario survives JSON serialization."""
        assert type(scenario).model_validate_json(scenario.model_dump_json()) == scenario
