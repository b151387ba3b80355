"""
atlas/planner/route_planner.py
──────────────────────────────
RoutePlanner: the service between a map and whoever draws it.

Responsibilities
─────────────────
  1. Hold one validated Graph (the map).
  2. Check that the requested start/end are locations on that map.
     The engine leaves this as a precondition; the service enforces it.
  3. Run a PathColony and turn its AntPath into drawable RouteSegments,
     resolving every node id back to a canvas position.
  4. Provide the distance labels for every edge of the map.

Error handling contract
────────────────────────
  UnknownLocationError: start or end id is not on the map. Raised before
                        any search is attempted.
  No path found:        NOT an error. plan() returns a PlannedRoute with
                        found == False and logs a warning.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from atlas.shared.models import (
    AntPath,
    EdgeLabel,
    Graph,
    Node,
    PlannedRoute,
    RouteSegment,
)
from atlas.planner.map_data import (
    DEFAULT_EDGE_COUNT,
    DEFAULT_END_ID,
    DEFAULT_NODES,
    DEFAULT_START_ID,
    generate_random_edges,
)
from aco_core import ACOConfig, PathColony, RandomSource

logger = logging.getLogger(__name__)


class UnknownLocationError(KeyError):
    """
    Raised when plan() is asked for a location that is not on the map.

    Attributes:
        node_id: The offending identifier.
    """

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Unknown location {node_id!r}")


class RoutePlanner:
    """
    Plans routes on one map.

    Public API:
        plan(start_id, end_id, config, rng) → PlannedRoute
        segments_for(path)                  → List[RouteSegment]
        edge_labels()                       → List[EdgeLabel]

    Attributes:
        graph      : Graph                   — the map.
        last_route : Optional[PlannedRoute]  — result of the latest plan().
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.last_route: Optional[PlannedRoute] = None
        logger.info(
            "RoutePlanner initialised with %d locations and %d edges.",
            len(graph.nodes), len(graph.edges),
        )

    @classmethod
    def with_random_map(
        cls,
        seed: Optional[int] = None,
        edge_count: int = DEFAULT_EDGE_COUNT,
        nodes: Optional[Sequence[Node]] = None,
    ) -> RoutePlanner:
        """Planner over `nodes` (default: the six locations) with freshly drawn edges."""
        nodes = list(nodes) if nodes is not None else list(DEFAULT_NODES)
        edges = generate_random_edges(nodes, edge_count, rng=np.random.default_rng(seed))
        return cls(Graph.from_parts(nodes, edges))

    # ── Primary public API ─────────────────────────────────────────────────────

    def plan(
        self,
        start_id: str = DEFAULT_START_ID,
        end_id: str = DEFAULT_END_ID,
        config: Optional[ACOConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> PlannedRoute:
        """
        Search the best route from start_id to end_id.

        Raises:
            UnknownLocationError: if either id is not on the map.
        """
        for node_id in (start_id, end_id):
            if node_id not in self.graph:
                raise UnknownLocationError(node_id)

        colony = PathColony(self.graph, start_id, end_id, config=config, rng=rng)
        best = colony.run()

        if best.found:
            logger.info(
                "Route %s → %s: %s (distance %.2f)",
                start_id, end_id, " → ".join(best.path), best.total_distance,
            )
        else:
            logger.warning(
                "No route found from %s to %s after %d iteration(s).",
                start_id, end_id, colony.config.iterations,
            )

        route = PlannedRoute(
            start_id=start_id,
            end_id=end_id,
            path=best.path,
            total_distance=best.total_distance,
            segments=self.segments_for(best),
            search_ms=colony.last_run_ms,
        )
        self.last_route = route
        return route

    def segments_for(self, best: AntPath) -> List[RouteSegment]:
        """One segment per hop of the path, in walk order."""
        segments: List[RouteSegment] = []
        for a, b in best.hops():
            segments.append(
                RouteSegment(
                    source_id=a,
                    target_id=b,
                    start=self.graph.get_node(a).position,
                    end=self.graph.get_node(b).position,
                )
            )
        return segments

    def edge_labels(self) -> List[EdgeLabel]:
        """Distance text anchored at the midpoint of every edge on the map."""
        labels: List[EdgeLabel] = []
        for edge in self.graph.edges:
            a = self.graph.get_node(edge.source).position
            b = self.graph.get_node(edge.target).position
            labels.append(
                EdgeLabel(
                    source_id=edge.source,
                    target_id=edge.target,
                    anchor=a.midpoint(b),
                    text=format(edge.distance, "g"),
                )
            )
        return labels

    def __repr__(self) -> str:
        return (
            f"RoutePlanner(locations={len(self.graph.nodes)}, "
            f"edges={len(self.graph.edges)})"
        )
