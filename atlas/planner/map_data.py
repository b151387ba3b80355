"""
atlas/planner/map_data.py
─────────────────────────
The default world: six named locations and a random edge generator.

The locations are fixed. The edges are not: each map draws `count`
distinct location pairs and gives each a random distance, so every new
map poses a slightly different routing problem.

Edge generation
────────────────
  1. Enumerate every unordered pair of locations (n·(n−1)/2 of them,
     15 for the six default locations).
  2. Sample `count` of them WITHOUT replacement, so a map never holds
     two edges for the same pair.
  3. Give each a distance uniform in [DISTANCE_MIN, DISTANCE_MIN + DISTANCE_SPAN),
     rounded to 2 decimals.

Pass a seeded numpy Generator to get the same map twice.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Optional, Sequence

import numpy as np

from atlas.shared.models import Edge, Node, Position

DEFAULT_NODES: List[Node] = [
    Node(node_id="MR1", name="Najwyższe Mrowisko", position=Position(x=150, y=350)),
    Node(node_id="BG1", name="Bagna Koralowe", position=Position(x=180, y=1250)),
    Node(node_id="RC1", name="Bród - Rzeka Dwóch Cieni", position=Position(x=450, y=800)),
    Node(node_id="LB1", name="Labirynt Pięciu Dolin", position=Position(x=500, y=700)),
    Node(node_id="BST", name="Baszta Zmierzchu - Góry Mgliste", position=Position(x=870, y=240)),
    Node(node_id="CT1", name="Zamek Verdantii", position=Position(x=830, y=1370)),
]

DEFAULT_START_ID: str = "MR1"
DEFAULT_END_ID: str = "CT1"

DEFAULT_EDGE_COUNT: int = 9
"""9 of the 15 possible pairs of the default map."""

DISTANCE_MIN: float = 10.0
DISTANCE_SPAN: float = 110.0


def generate_random_edges(
    nodes: Sequence[Node],
    count: int = DEFAULT_EDGE_COUNT,
    rng: Optional[np.random.Generator] = None,
) -> List[Edge]:
    """
    Draw `count` distinct undirected edges over `nodes`.

    Args:
        nodes: Locations to connect.
        count: Number of edges. Capped at the number of possible pairs.
        rng:   numpy Generator; a fresh unseeded one if omitted.

    Returns:
        Edges in sampling order.

    Raises:
        ValueError: if count is negative.
    """
    if count < 0:
        raise ValueError(f"Edge count must be non-negative, got {count}")

    rng = rng if rng is not None else np.random.default_rng()
    pairs = list(combinations([node.node_id for node in nodes], 2))
    count = min(count, len(pairs))
    if count == 0:
        return []

    chosen = rng.choice(len(pairs), size=count, replace=False)
    edges: List[Edge] = []
    for idx in chosen:
        source, target = pairs[int(idx)]
        distance = round(float(rng.random() * DISTANCE_SPAN + DISTANCE_MIN), 2)
        edges.append(Edge(source=source, target=target, distance=distance))
    return edges
