#!/usr/bin/env python3
"""
Generate a scenario and save it as JSON.

This runs the full pipeline:
1. Province center placement on the coarse grid
2. Province growth
3. Adjacency graph and province distances
4. Island, ocean and lake repair
5. Capital, secondary, outpost and generic province assignment

Usage:
    python generate_scenario.py [seed] [template_set]

If no seed is provided, defaults to "default_seed"
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

from py_hexmap.config import get_templates, settings
from py_hexmap.core.context import MapOptions
from py_hexmap.core.naming import load_province_names
from py_hexmap.core.scenario import ScenarioGenerator
from py_hexmap.utils.logging import configure_logging


def main():
    """Generate one scenario with the default settings."""
    seed = sys.argv[1] if len(sys.argv) > 1 else "default_seed"
    template_set = sys.argv[2] if len(sys.argv) > 2 else settings.template_set

    configure_logging(settings.log_level, "console")

    options = MapOptions(
        width=settings.default_map_width,
        height=settings.default_map_height,
        radius=settings.default_radius,
        land_fraction=settings.default_land_fraction,
    )
    print("\nGenerating scenario...")
    print(f"  Dimensions: {options.width}x{options.height}")
    print(f"  Radius: {options.radius}, land fraction: {options.land_fraction}")
    print(f"  Seed: {seed}")

    generator = ScenarioGenerator(
        get_templates(template_set),
        load_province_names(settings.province_names_file),
        options,
    )
    scenario = generator.generate(seed)

    print(f"  Provinces: {scenario.province_count} (desired {scenario.desired_province_count})")
    print(f"  Land cells: {len(scenario.cells)}")
    for faction, province_id in scenario.capitals.items():
        print(f"  {faction.title()} capital: #{province_id} {scenario.get_province(province_id).name}")
    for faction, province_id in scenario.secondaries.items():
        print(f"  {faction.title()} secondary: #{province_id}")
    print(f"  Outposts: {scenario.outposts}")
    if scenario.unreachable_provinces:
        print(f"  Unreachable provinces: {scenario.unreachable_provinces}")

    output_file = f"scenario_{seed}.json"
    Path(output_file).write_text(scenario.model_dump_json(indent=2), encoding="utf-8")
    print(f"  Saved to: {output_file}")


if __name__ == "__main__":
    main()
