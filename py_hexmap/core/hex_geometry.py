"""
Hex grid geometry for flat-top hexes in an odd-q offset layout.

Cells are addressed by integer (x, y) pairs where x is the column. Odd columns
are shifted half a cell up, so the neighbor offsets depend on column parity.
"""

from enum import IntEnum
from typing import Iterator, Tuple

Cell = Tuple[int, int]


class Direction(IntEnum):
    """Border directions around a hex, in offset-table order."""

    LOWER_LEFT = 0
    UPPER_LEFT = 1
    UP = 2
    UPPER_RIGHT = 3
    LOWER_RIGHT = 4
    BOTTOM = 5


EVEN_COLUMN_OFFSETS: Tuple[Cell, ...] = (
    (-1, -1),
    (-1, 0),
    (0, 1),
    (1, 0),
    (1, -1),
    (0, -1),
)

ODD_COLUMN_OFFSETS: Tuple[Cell, ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (0, -1),
)


def neighbor_offsets(x: int) -> Tuple[Cell, ...]:
    """Return the six neighbor offsets for a cell in column x."""
    return ODD_COLUMN_OFFSETS if x % 2 == 1 else EVEN_COLUMN_OFFSETS


def hex_neighbors(x: int, y: int) -> Iterator[Cell]:
    """Yield the coordinates of the six cells adjacent to (x, y).

    No bounds checking is done here; callers filter with their own bounds.
    """
    for dx, dy in neighbor_offsets(x):
        yield x + dx, y + dy


def direction_of(dx: int, dy: int, odd_column: bool) -> Direction:
    """
    Convert an offset to an adjacent hex into its border direction.

    Args:
        dx: X offset to the adjacent hex
        dy: Y offset to the adjacent hex
        odd_column: Whether the origin cell sits in an odd column

    Returns:
        Direction of the shared border

    Raises:
        ValueError: If the offset does not point at an adjacent hex
    """
    offsets = ODD_COLUMN_OFFSETS if odd_column else EVEN_COLUMN_OFFSETS
    for index, offset in enumerate(offsets):
        if offset == (dx, dy):
            return Direction(index)
    parity = "odd" if odd_column else "even"
    raise ValueError(f"Invalid map cell delta: ({dx}, {dy}) for {parity} column")


def cell_distance(one: Cell, two: Cell) -> int:
    """Cheap grid distance between two cells (Chebyshev on offset coordinates)."""
    return max(abs(one[0] - two[0]), abs(one[1] - two[1]))
