"""
atlas/planner — map data and route planning on top of aco_core.

Public API:
    RoutePlanner          — holds one map, plans routes, resolves them to positions
    UnknownLocationError  — raised for a start/end id that is not on the map
    DEFAULT_NODES         — the six default locations
    generate_random_edges — seedable random edge set over a node list
"""

from atlas.planner.map_data import (
    DEFAULT_END_ID,
    DEFAULT_NODES,
    DEFAULT_START_ID,
    generate_random_edges,
)
from atlas.planner.route_planner import RoutePlanner, UnknownLocationError

__all__ = [
    "DEFAULT_END_ID",
    "DEFAULT_NODES",
    "DEFAULT_START_ID",
    "RoutePlanner",
    "UnknownLocationError",
    "generate_random_edges",
]
