"""
aco_core/pheromone.py
─────────────────────
The pheromone table: the colony's memory for ONE search run.

What is pheromone?
──────────────────
Ants deposit pheromone on the edges they walk. Shorter complete paths
deposit more per edge, so over iterations the short route's edges carry
more pheromone than the long route's and become more attractive to the
next round of ants.

Two forces balance each other:
  1. Evaporation  — every entry is multiplied by (1 − ρ) once per
                    iteration. Stale preferences fade.
  2. Deposition   — every valid path of the iteration adds 1 / L (L = its
                    total distance) to each edge it traversed. Several ants
                    on the same edge accumulate additively.

Table layout
────────────
  Shape : (n_nodes, n_nodes), float64
  τ[i][j]: pheromone on the step "node i → node j".

  Every edge seeds BOTH τ[i][j] and τ[j][i] with TAU_INITIAL, and every
  update writes both cells, so the matrix is always symmetric: an
  undirected edge has exactly one strength, mirrored into both directions.
  Pairs with no edge stay at 0.0 and are never read by an ant.

  Node ids are translated to integer rows/columns once, at construction.
  No string keys are built on the hot path.

Lifetime
────────
  Created at the start of PathColony.run(), discarded when it returns.
  Nothing persists across runs.
"""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from atlas.shared.models import Edge

# ── Pheromone constants ────────────────────────────────────────────────────────

TAU_INITIAL: float = 1.0
"""Seed pheromone on both directions of every edge.
All edges equal at iteration 0, so the first round is driven purely by
visibility (1 / distance).
"""

EVAPORATION_RATE: float = 0.5
"""ρ (rho): fraction of pheromone lost per iteration.

τ_new = τ_old × (1 − ρ)

ρ = 0.5 halves every entry each round. An edge that no ant reinforces
drops to 1.0 × 0.5^20 ≈ 1e-6 over a default 20-iteration run.
"""

Q: float = 1.0
"""Deposit numerator: each traversed edge gains Q / total_distance."""


class PheromoneTable:
    """
    Symmetric numpy matrix of pheromone strength per node pair.

    Used by:
        Ant._weights()    → reads strength() for each candidate step.
        PathColony.run()  → calls evaporate() then deposit() each iteration.
        Tests             → set_strength() to bias a route, snapshot() to inspect.

    Thread safety:
        Not thread-safe. One table belongs to one run() call.
    """

    def __init__(
        self,
        node_ids: Sequence[str],
        edges: Iterable[Edge],
        initial: float = TAU_INITIAL,
    ) -> None:
        """
        Seed the table from the graph's edges.

        Args:
            node_ids: Every node id of the graph. Order defines matrix indices.
            edges:    The graph's edges. Each sets both directed cells to `initial`.
                      Parallel edges map onto the same cell pair.
            initial:  Seed value, TAU_INITIAL unless a test wants otherwise.

        Raises:
            KeyError: if an edge endpoint is not in node_ids.
        """
        self._index: Dict[str, int] = {node_id: i for i, node_id in enumerate(node_ids)}
        n = len(self._index)
        self._matrix: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)

        for edge in edges:
            i, j = self._index[edge.source], self._index[edge.target]
            self._matrix[i, j] = initial
            self._matrix[j, i] = initial

    # ── Core operations ────────────────────────────────────────────────────────

    def strength(self, from_id: str, to_id: str) -> float:
        """
        Pheromone on the step from_id → to_id.

        Raises:
            KeyError: if either id is unknown to this table.
        """
        return float(self._matrix[self._index[from_id], self._index[to_id]])

    def evaporate(self, rate: float = EVAPORATION_RATE) -> None:
        """
        Multiply every entry by (1 − rate), in place.

        Zero cells (non-edges) stay zero. No floor or ceiling is applied.
        """
        self._matrix *= (1.0 - rate)

    def deposit(self, path: Sequence[str], total_distance: float) -> None:
        """
        Reinforce every edge along one valid path.

        Formula, for each consecutive (a, b) in path:
            τ[a][b] += Q / total_distance
            τ[b][a] += Q / total_distance

        Guards:
            • fewer than two nodes → nothing was traversed, no-op. This is
              the degenerate start == end path with distance 0.
            • total_distance ≤ 0   → no-op, avoids division by zero.
        """
        if len(path) < 2 or total_distance <= 0.0:
            return

        amount = Q / total_distance
        for a, b in zip(path, path[1:]):
            i, j = self._index[a], self._index[b]
            self._matrix[i, j] += amount
            self._matrix[j, i] += amount

    def set_strength(self, a: str, b: str, value: float) -> None:
        """Overwrite the strength of the a–b pair (both directions)."""
        if value < 0.0:
            raise ValueError(f"Pheromone must be non-negative, got {value}")
        i, j = self._index[a], self._index[b]
        self._matrix[i, j] = value
        self._matrix[j, i] = value

    # ── Inspection & testing ───────────────────────────────────────────────────

    def snapshot(self) -> NDArray[np.float64]:
        """Deep copy of the matrix. Mutating it does not touch the table."""
        return self._matrix.copy()

    @property
    def shape(self) -> tuple[int, int]:
        return self._matrix.shape

    def __repr__(self) -> str:
        nonzero = self._matrix[self._matrix > 0.0]
        if nonzero.size == 0:
            return f"PheromoneTable(n_nodes={len(self._index)}, empty)"
        return (
            f"PheromoneTable(n_nodes={len(self._index)}, "
            f"min={nonzero.min():.4f}, max={nonzero.max():.4f}, "
            f"mean={nonzero.mean():.4f})"
        )
