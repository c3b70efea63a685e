"""
Hex grid coordinate math.

The map is a rectangular block of flat-topped hexes laid out in
"odd-q" (shoved odd) order: odd columns sit half a hex lower than even
columns. Cells are addressed either by a linear index
(``row * width + col``) or by a ``HexCoord(col, row)`` pair.

This module provides:
- Index <-> coordinate conversion
- Neighbor lookup in the six compass directions
- Hex distance between two coordinates, scalar and vectorized
"""

from enum import IntEnum
from typing import Iterator, List, NamedTuple, NewType, Optional, Sequence

import numpy as np

CellIndex = NewType("CellIndex", int)

# Distance reported when either side is absent ("unreachable")
MAX_DISTANCE = int(np.iinfo(np.int32).max)


class HexCoord(NamedTuple):
    """Column/row position of a hex on the grid."""

    col: int
    row: int


class Direction(IntEnum):
    """Neighbor directions, clockwise starting north."""

    NORTH = 0
    NORTHEAST = 1
    SOUTHEAST = 2
    SOUTH = 3
    SOUTHWEST = 4
    NORTHWEST = 5


# (dcol, drow) per direction; odd columns are shifted half a hex down
_EVEN_COLUMN_OFFSETS = (
    (0, -1),
    (1, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
    (-1, -1),
)
_ODD_COLUMN_OFFSETS = (
    (0, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
)


def hex_distance(a: Optional[HexCoord], b: Optional[HexCoord]) -> int:
    """
    Minimum number of hex steps between two coordinates.

    Because columns are staggered, moving diagonally across the stagger
    boundary costs one extra step in certain cases. Absent coordinates
    are infinitely far from everything.

    Args:
        a: First coordinate, or None
        b: Second coordinate, or None

    Returns:
        Step count, or MAX_DISTANCE if either coordinate is None
    """
    if a is None or b is None:
        return MAX_DISTANCE

    dx = abs(a.col - b.col)
    dy = abs(a.row - b.row)

    penalty = 0
    if (a.row < b.row and a.col % 2 == 0 and b.col % 2 == 1) or (
        a.row > b.row and a.col % 2 == 1 and b.col % 2 == 0
    ):
        penalty = 1

    return max(dx, dy + penalty + dx // 2)


class HexGrid:
    """A fixed width x height block of hex cells."""

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")

        self.width = width
        self.height = height
        self.size = width * height

        indices = np.arange(self.size, dtype=np.int64)
        self.cell_columns = indices % width
        self.cell_rows = indices // width

    def __repr__(self) -> str:
        return f"HexGrid({self.width}x{self.height})"

    def contains(self, coord: HexCoord) -> bool:
        """Check if a coordinate lies on the grid."""
        return 0 <= coord.col < self.width and 0 <= coord.row < self.height

    def index(self, coord: HexCoord) -> int:
        """Convert a coordinate to its linear cell index."""
        if not self.contains(coord):
            raise IndexError(f"Coordinate {tuple(coord)} is outside {self!r}")
        return coord.row * self.width + coord.col

    def coord(self, index: int) -> HexCoord:
        """Convert a linear cell index to its coordinate."""
        if not 0 <= index < self.size:
            raise IndexError(f"Cell index {index} is outside {self!r}")
        return HexCoord(index % self.width, index // self.width)

    def coords(self) -> Iterator[HexCoord]:
        """Iterate over every coordinate in index order."""
        for i in range(self.size):
            yield HexCoord(i % self.width, i // self.width)

    def neighbor(self, index: int, direction: int) -> Optional[int]:
        """
        Return the index of the neighbor in the given direction.

        Args:
            index: Cell index
            direction: 0 = north, 1 = northeast, ... 5 = northwest

        Returns:
            Neighbor index, or None if it would fall off the grid
        """
        if not 0 <= direction < 6:
            raise ValueError(f"Direction must be in 0..5, got {direction}")

        col, row = self.coord(index)
        offsets = _ODD_COLUMN_OFFSETS if col % 2 else _EVEN_COLUMN_OFFSETS
        dcol, drow = offsets[direction]

        target = HexCoord(col + dcol, row + drow)
        if not self.contains(target):
            return None
        return self.index(target)

    def neighbors(self, index: int) -> List[int]:
        """All on-grid neighbors of a cell in direction order (0 to 6 entries)."""
        result = []
        for direction in Direction:
            neighbor = self.neighbor(index, direction)
            if neighbor is not None:
                result.append(neighbor)
        return result

    def hex_neighbors(self, coord: HexCoord) -> List[HexCoord]:
        """Same as neighbors() but with coordinates instead of indices."""
        return [self.coord(n) for n in self.neighbors(self.index(coord))]

    def distances_to(self, centers: Sequence[Optional[HexCoord]]) -> np.ndarray:
        """
        Vectorized hex_distance from every cell to every center.

        Args:
            centers: Center coordinates; None entries are unreachable

        Returns:
            Array of shape (size, len(centers)), MAX_DISTANCE for absent centers
        """
        n_centers = len(centers)
        valid = np.array([c is not None for c in centers], dtype=bool)
        center_cols = np.array([c.col if c is not None else 0 for c in centers], dtype=np.int64)
        center_rows = np.array([c.row if c is not None else 0 for c in centers], dtype=np.int64)

        cols = self.cell_columns[:, None]
        rows = self.cell_rows[:, None]
        ccols = center_cols.reshape(1, n_centers)
        crows = center_rows.reshape(1, n_centers)

        dx = np.abs(cols - ccols)
        dy = np.abs(rows - crows)

        cell_even = (cols % 2) == 0
        center_even = (ccols % 2) == 0
        penalty = ((rows < crows) & cell_even & ~center_even) | (
            (rows > crows) & ~cell_even & center_even
        )

        distances = np.maximum(dx, dy + penalty.astype(np.int64) + dx // 2)
        distances[:, ~valid] = MAX_DISTANCE
        return distances
