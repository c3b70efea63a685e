"""
Core map generation functionality.
"""

from .hex_grid import HexGrid, HexCoord, Direction, hex_distance, MAX_DISTANCE
from .regions import RegionPartitioner, RegionPartition, partition
from .adjacency import build_adjacency, adjacency_edges
from .terrain import TerrainType, TerrainAssignment, assign_terrain, TERRAIN_NAMES
from .map_generator import MapConfig, HexMap, generate_map
from .random_source import MinStdRandom

__all__ = ['HexGrid', 'HexCoord', 'Direction', 'hex_distance', 'MAX_DISTANCE',
           'RegionPartitioner', 'RegionPartition', 'partition',
           'build_adjacency', 'adjacency_edges',
           'TerrainType', 'TerrainAssignment', 'assign_terrain', 'TERRAIN_NAMES',
           'MapConfig', 'HexMap', 'generate_map', 'MinStdRandom']
