"""
Region partitioning for hex maps.

Splits the grid into a fixed number of regions using a discrete Voronoi
diagram refined by Lloyd-style relaxation:
1. Pick random seed cells (duplicates allowed, they simply merge)
2. Assign every cell to its closest center by hex distance
3. Move each center to the mean position of its cells
4. Repeat, then do a final assignment against the settled centers

Regions can be "absorbed" by their neighbors during relaxation and end up
with no cells. Such a region keeps an absent center, can never be chosen
again, and is left empty in the result.
"""

from dataclasses import dataclass
from typing import List, NewType, Optional

import numpy as np
import structlog

from .hex_grid import MAX_DISTANCE, HexCoord, HexGrid, hex_distance

logger = structlog.get_logger()

RegionId = NewType("RegionId", int)

# Rounds of assign + recenter; regions stop moving noticeably after this
RELAXATION_ROUNDS = 4


@dataclass
class RegionPartition:
    """Result of partitioning a grid into regions."""

    regions: np.ndarray  # regions[cell] = region id
    centers: List[Optional[HexCoord]]  # centers used for the final assignment

    @property
    def num_regions(self) -> int:
        return len(self.centers)

    def sizes(self) -> np.ndarray:
        """Number of cells owned by each region."""
        return np.bincount(self.regions, minlength=self.num_regions)

    def empty_regions(self) -> List[int]:
        """Regions that were absorbed and own no cells."""
        return [int(r) for r in np.flatnonzero(self.sizes() == 0)]


def draw_seed_centers(grid: HexGrid, num_regions: int, rng) -> List[Optional[HexCoord]]:
    """
    Draw one uniformly random cell per region as its starting center.

    Args:
        grid: Hex grid
        num_regions: Number of centers to draw
        rng: Random source with a randrange(stop) method

    Returns:
        List of seed coordinates, possibly with duplicates
    """
    return [grid.coord(rng.randrange(grid.size)) for _ in range(num_regions)]


def find_closest_region(coord: HexCoord, centers: List[Optional[HexCoord]]) -> int:
    """
    Return the region whose center is closest to coord.

    Ties go to the lowest region id. Returns -1 only if every center is
    absent.
    """
    closest = -1
    best_so_far = MAX_DISTANCE

    for region, center in enumerate(centers):
        dist = hex_distance(coord, center)
        if dist < best_so_far:
            closest = region
            best_so_far = dist

    return closest


def assign_closest_regions(grid: HexGrid, centers: List[Optional[HexCoord]]) -> np.ndarray:
    """
    Assign every cell to its closest center.

    Vectorized equivalent of calling find_closest_region() for each cell:
    argmin keeps the first minimum, so ties go to the lowest region id.
    """
    if not any(c is not None for c in centers):
        raise ValueError("Cannot assign cells: every region center is absent")

    distances = grid.distances_to(centers)
    return np.argmin(distances, axis=1).astype(np.int32)


def compute_centers(grid: HexGrid, regions: np.ndarray, num_regions: int) -> List[Optional[HexCoord]]:
    """
    Compute the center of mass of each region.

    Coordinates are averaged with integer truncation. Regions with no
    cells get an absent (None) center.
    """
    if len(regions) != grid.size:
        raise ValueError(f"Region assignment has {len(regions)} cells, expected {grid.size}")

    counts = np.bincount(regions, minlength=num_regions)
    col_sums = np.bincount(regions, weights=grid.cell_columns, minlength=num_regions)
    row_sums = np.bincount(regions, weights=grid.cell_rows, minlength=num_regions)

    centers: List[Optional[HexCoord]] = []
    for r in range(num_regions):
        if counts[r] > 0:
            centers.append(HexCoord(int(col_sums[r]) // int(counts[r]), int(row_sums[r]) // int(counts[r])))
        else:
            centers.append(None)
    return centers


class RegionPartitioner:
    """Generates random, roughly even regions over a hex grid."""

    def __init__(self, grid: HexGrid, num_regions: int, relaxation_rounds: int = RELAXATION_ROUNDS):
        """
        Initialize the partitioner.

        Args:
            grid: Hex grid to partition
            num_regions: Number of regions to create
            relaxation_rounds: Assign/recenter rounds before the final pass
        """
        if num_regions < 1:
            raise ValueError(f"Need at least one region, got {num_regions}")
        if relaxation_rounds < 0:
            raise ValueError(f"Relaxation rounds cannot be negative, got {relaxation_rounds}")

        self.grid = grid
        self.num_regions = num_regions
        self.relaxation_rounds = relaxation_rounds

    def run(self, rng) -> RegionPartition:
        """
        Partition the grid.

        Args:
            rng: Random source with a randrange(stop) method

        Returns:
            RegionPartition with a region id for every cell
        """
        logger.info(
            "Partitioning regions",
            grid=repr(self.grid),
            num_regions=self.num_regions,
            rounds=self.relaxation_rounds,
        )

        centers = draw_seed_centers(self.grid, self.num_regions, rng)

        for round_number in range(self.relaxation_rounds):
            regions = assign_closest_regions(self.grid, centers)
            centers = compute_centers(self.grid, regions, self.num_regions)
            logger.debug(
                "Relaxation round complete",
                round=round_number + 1,
                empty_regions=sum(1 for c in centers if c is None),
            )

        regions = assign_closest_regions(self.grid, centers)
        result = RegionPartition(regions=regions, centers=centers)

        empty = result.empty_regions()
        logger.info("Regions partitioned", empty_regions=len(empty))
        return result


def partition(width: int, height: int, num_regions: int, rng, relaxation_rounds: int = RELAXATION_ROUNDS) -> np.ndarray:
    """
    Partition a width x height grid into regions.

    Returns:
        Array of region ids, one per cell index
    """
    grid = HexGrid(width, height)
    return RegionPartitioner(grid, num_regions, relaxation_rounds).run(rng).regions
