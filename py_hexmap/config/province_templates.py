"""
Province template pools.

Every pool follows the same layout:
  0     world center
  1-3   orc, elf and dwarf capitals
  4-6   orc, elf and dwarf secondary provinces
  7     border outpost
  8+    generic provinces, reused as often as needed
"""

from typing import Dict, List

from ..core.models import ProvinceTemplate

# Race ids
HUMAN = 1
ORC = 2
ELF = 3
DWARF = 4

# Faction ids (0 = unaligned)
ORC_HORDE = 1
ELVEN_COURT = 2
DWARVEN_HOLDS = 3

_CLASSIC = [
    {
        "name": "Utopia",
        "income": 10,
        "manpower": 2,
        "favor": 5,
        "race_id": HUMAN,
        "trainable": [1, 2, 3],
        "units": [{"id": 3, "qty": 20}],
    },
    {
        "name": "Grimgate",
        "income": 6,
        "manpower": 8,
        "favor": 1,
        "race_id": ORC,
        "faction_id": ORC_HORDE,
        "trainable": [10, 11, 12],
        "units": [{"id": 10, "qty": 12}, {"id": 11, "qty": 6}],
        "training": [{"id": 10, "qty": 2, "standing": True}],
    },
    {
        "name": "Silverglade",
        "income": 7,
        "manpower": 4,
        "favor": 3,
        "race_id": ELF,
        "faction_id": ELVEN_COURT,
        "trainable": [20, 21, 22],
        "units": [{"id": 20, "qty": 10}, {"id": 21, "qty": 4}],
        "training": [{"id": 20, "qty": 1, "standing": True}],
    },
    {
        "name": "Ironhold",
        "income": 8,
        "manpower": 5,
        "favor": 1,
        "race_id": DWARF,
        "faction_id": DWARVEN_HOLDS,
        "trainable": [30, 31, 32],
        "units": [{"id": 30, "qty": 10}, {"id": 32, "qty": 2}],
        "training": [{"id": 30, "qty": 1, "standing": True}],
    },
    {
        "name": "Skullcrag",
        "income": 3,
        "manpower": 6,
        "race_id": ORC,
        "faction_id": ORC_HORDE,
        "trainable": [10, 11],
        "units": [{"id": 10, "qty": 6}],
    },
    {
        "name": "Moonwater",
        "income": 4,
        "manpower": 3,
        "favor": 2,
        "race_id": ELF,
        "faction_id": ELVEN_COURT,
        "trainable": [20, 21],
        "units": [{"id": 20, "qty": 5}],
    },
    {
        "name": "Deepdelve",
        "income": 5,
        "manpower": 3,
        "race_id": DWARF,
        "faction_id": DWARVEN_HOLDS,
        "trainable": [30, 31],
        "units": [{"id": 30, "qty": 5}],
    },
    {
        "name": "Border March",
        "income": 2,
        "manpower": 4,
        "race_id": HUMAN,
        "trainable": [1, 2],
        "units": [{"id": 1, "qty": 8}],
    },
    {
        "name": "Farmland",
        "income": 4,
        "manpower": 2,
        "race_id": HUMAN,
        "trainable": [1],
        "units": [{"id": 1, "qty": 4}],
    },
    {
        "name": "Hill Country",
        "income": 2,
        "manpower": 3,
        "favor": 1,
        "race_id": HUMAN,
        "trainable": [1, 2],
        "units": [{"id": 2, "qty": 3}],
    },
    {
        "name": "Old Forest",
        "income": 2,
        "manpower": 1,
        "favor": 2,
        "race_id": HUMAN,
        "trainable": [2],
        "units": [{"id": 2, "qty": 2}],
    },
    {
        "name": "Marshland",
        "income": 1,
        "manpower": 1,
        "favor": 3,
        "race_id": HUMAN,
        "trainable": [1],
        "units": [{"id": 1, "qty": 2}],
    },
    {
        "name": "Trade Town",
        "income": 6,
        "manpower": 1,
        "race_id": HUMAN,
        "trainable": [1, 3],
        "units": [{"id": 3, "qty": 2}],
    },
]

TEMPLATE_SETS: Dict[str, List[dict]] = {
    "classic": _CLASSIC,
    # One generic archetype only: every unclaimed province looks alike
    "minimal": _CLASSIC[:9],
}


def get_templates(name: str) -> List[ProvinceTemplate]:
    """
    Build the template pool of a named set.

    Args:
        name: Template set name

    Returns:
        Fresh template models; callers may modify them freely

    Raises:
        KeyError: If the set does not exist
    """
    if name not in TEMPLATE_SETS:
        raise KeyError(f"Unknown template set: {name}")
    return [ProvinceTemplate.model_validate(entry) for entry in TEMPLATE_SETS[name]]


def list_template_sets() -> List[str]:
    """Names of the available template sets."""
    return list(TEMPLATE_SETS.keys())
