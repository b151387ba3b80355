"""
aco_core/ant.py
───────────────
One ant: walks the graph once, from start towards end.

What does an ant do?
─────────────────────
An ant starts on the start node and repeatedly steps to an unvisited
neighbour, chosen at random but biased towards edges with more pheromone
and shorter distance. It stops when it reaches the end node (a valid
candidate path) or when every neighbour has already been visited (stuck:
the walk is abandoned and contributes nothing).

The two inputs to every step
─────────────────────────────
1. Pheromone trail (τ)  — what did previous rounds learn?
   Read from the run's PheromoneTable for the step current → next.

2. Visibility (η)       — 1 / distance of the candidate edge.
   Static: it never changes during a run.

The selection weight
─────────────────────
weight(edge) = τ(current, next)^α × (1 / distance)^β

  α = 1.0: pheromone exponent.
  β = 5.0: visibility exponent. With β this high, an edge half as long is
           32× more attractive before any pheromone has been laid.

Roulette wheel
───────────────
Draw r uniformly in [0, Σ weights). Walk the candidates in enumeration
order accumulating weight and take the first whose cumulative weight is
≥ r. Implemented as np.cumsum + np.searchsorted(side="left"), which
returns exactly that first index.

Dead ends
──────────
Two situations end a walk early and make construct() return None:
  • no unvisited neighbour is left;
  • the total weight is 0 or not finite (every weight underflowed, or an
    overflow produced inf). Picking "something" there would be arbitrary,
    so the ant is treated as stuck.
"""

from __future__ import annotations

from typing import List, Optional, Set

import numpy as np

from atlas.shared.models import AntPath, Edge, Graph
from aco_core.pheromone import PheromoneTable
from aco_core.random_source import RandomSource, make_random_source

# ── ACO hyperparameters ────────────────────────────────────────────────────────

ALPHA: float = 1.0
"""Pheromone influence exponent. τ^ALPHA, linear by default."""

BETA: float = 5.0
"""Visibility influence exponent.
(1/d)^BETA: strongly favours short edges from the very first round.
"""


class Ant:
    """
    Constructs one candidate path using pheromone + visibility.

    Lifecycle:
        1. __init__()   → stand on start, visited = {start}.
        2. construct()  → walk until end or stuck.
        3. Read results → return value of construct(), or ant.path /
                          ant.total_distance / ant.is_stuck.

    The ant is single-use: create a new Ant for each walk.

    Attributes:
        path           : List[str] — node ids visited so far, in order.
        total_distance : float     — sum of traversed edge distances.
        is_stuck       : bool      — True if the walk was abandoned.
    """

    def __init__(
        self,
        graph: Graph,
        pheromone: PheromoneTable,
        start_id: str,
        end_id: str,
        alpha: float = ALPHA,
        beta: float = BETA,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._graph = graph
        self._pheromone = pheromone
        self._end_id = end_id
        self._alpha = alpha
        self._beta = beta
        self._rng = rng if rng is not None else make_random_source()

        self.current: str = start_id
        self.visited: Set[str] = {start_id}
        self.path: List[str] = [start_id]
        self.total_distance: float = 0.0
        self.is_stuck: bool = False

    # ── Walk ──────────────────────────────────────────────────────────────────

    def construct(self) -> Optional[AntPath]:
        """
        Walk from start until reaching end or getting stuck.

        Returns:
            AntPath for a walk that reached end_id, None for a stuck walk.
            start == end returns the single-node path at distance 0.0
            without drawing any random number.
        """
        while self.current != self._end_id:
            candidates = self.candidate_edges()
            if not candidates:
                self.is_stuck = True
                return None

            edge = self.select_next(candidates)
            if edge is None:
                self.is_stuck = True
                return None

            self._move(edge)

        return AntPath(path=list(self.path), total_distance=self.total_distance)

    def candidate_edges(self) -> List[Edge]:
        """Edges from the current node whose far end has not been visited yet."""
        return [
            edge
            for edge in self._graph.incident_edges(self.current)
            if edge.other_end(self.current) not in self.visited
        ]

    def select_next(self, candidates: List[Edge]) -> Optional[Edge]:
        """
        Roulette-wheel selection over candidate edges.

        Args:
            candidates: Non-empty list of edges leaving the current node.

        Returns:
            The chosen edge, or None if the weights are degenerate
            (sum 0 or not finite).
        """
        weights = self._weights(candidates)
        total = float(weights.sum())
        if not np.isfinite(total) or total <= 0.0:
            return None

        draw = self._rng.random() * total
        cumulative = np.cumsum(weights)
        idx = int(np.searchsorted(cumulative, draw, side="left"))
        # cumsum and sum may round differently in the last ulp
        return candidates[min(idx, len(candidates) - 1)]

    # ── Internals ─────────────────────────────────────────────────────────────

    def _weights(self, candidates: List[Edge]) -> np.ndarray:
        tau = np.array(
            [
                self._pheromone.strength(self.current, edge.other_end(self.current))
                for edge in candidates
            ],
            dtype=np.float64,
        )
        visibility = np.array(
            [1.0 / edge.distance for edge in candidates], dtype=np.float64
        )
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            return np.power(tau, self._alpha) * np.power(visibility, self._beta)

    def _move(self, edge: Edge) -> None:
        nxt = edge.other_end(self.current)
        self.current = nxt
        self.visited.add(nxt)
        self.path.append(nxt)
        self.total_distance += edge.distance

    def __repr__(self) -> str:
        return (
            f"Ant(at={self.current!r}, hops={len(self.path) - 1}, "
            f"distance={self.total_distance:.2f}, stuck={self.is_stuck})"
        )
