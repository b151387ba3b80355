"""
aco_core/colony.py
──────────────────
The PathColony: runs all ants across all iterations and keeps the best path.

How the colony works
─────────────────────
  1. Seeds a fresh PheromoneTable: both directions of every edge = 1.0.
  2. For each iteration:
       a. Spawns ant_count ants. Each walks independently from start,
          reading (never writing) the table.
       b. Collects the walks that reached end into this round's valid set.
       c. Evaporates the whole table.
       d. Deposits 1 / L on every edge of every valid path of the round.
       e. Replaces the running best if a valid path this round is strictly
          shorter.
  3. Returns the running best after the last iteration.

Ordering inside a round
────────────────────────
All walks of a round finish before the table changes. Evaporation
happens before deposition, and deposition uses the round's collected
paths. The table therefore only changes between rounds, never while an
ant is deciding.

No path
────────
If no ant in any round reaches the end node (disconnected graph, or
zero ants / zero iterations) the result is AntPath.none(). That is a
normal outcome of a probabilistic search, not an exception.

start == end
─────────────
The walk is already at its destination: as soon as one ant exists the
result is the single-node path at distance 0.0, returned without drawing
from the random source. With zero iterations or zero ants no ant ever
exists, so the result is AntPath.none() like any other empty run.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, List, Optional

from atlas.shared.models import AntPath, Graph
from aco_core.ant import Ant
from aco_core.config import ACOConfig
from aco_core.pheromone import PheromoneTable
from aco_core.random_source import RandomSource, make_random_source

logger = logging.getLogger(__name__)


class PathColony:
    """
    Runs the ACO path search between two nodes of one graph.

    Usage:
        colony = PathColony(graph, "MR1", "CT1", config=ACOConfig(seed=7))
        best   = colony.run()          # AntPath

    After run():
        colony.best_distance_history → best-so-far distance after each
                                       iteration (non-increasing).
        colony.valid_path_counts     → number of ants that reached end,
                                       per iteration.
        colony.pheromone             → the table at the end of the run.
        colony.last_run_ms           → wall-clock duration of run().
    """

    def __init__(
        self,
        graph: Graph,
        start_id: str,
        end_id: str,
        config: Optional[ACOConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Args:
            graph:    Validated Graph. start_id / end_id are expected to be
                      nodes of it; an unknown start simply has no edges.
            start_id: Where every ant starts.
            end_id:   Where a walk counts as valid.
            config:   ACOConfig, defaults to ACOConfig().
            rng:      RandomSource shared by all ants of this colony. When
                      omitted, built from config.seed.
        """
        self._graph = graph
        self._start_id = start_id
        self._end_id = end_id
        self._config = config if config is not None else ACOConfig()
        self._rng = rng if rng is not None else make_random_source(self._config.seed)

        # Populated by run()
        self.best_distance_history: List[float] = []
        self.valid_path_counts: List[int] = []
        self.pheromone: Optional[PheromoneTable] = None
        self.last_run_ms: float = 0.0

    @property
    def config(self) -> ACOConfig:
        return self._config

    # ── Main loop ─────────────────────────────────────────────────────────────

    def run(self) -> AntPath:
        """
        Execute the colony and return the best path found.

        Returns:
            AntPath with the lowest total distance seen over all iterations,
            or AntPath.none() if no ant ever reached end_id.
        """
        start = time.perf_counter()
        self.best_distance_history = []
        self.valid_path_counts = []

        cfg = self._config
        if self._start_id == self._end_id:
            self.pheromone = None
            self.last_run_ms = (time.perf_counter() - start) * 1000.0
            if cfg.iterations > 0 and cfg.ant_count > 0:
                return AntPath(path=[self._start_id], total_distance=0.0)
            return AntPath.none()

        table = PheromoneTable(self._graph.node_ids, self._graph.edges)
        self.pheromone = table
        best = AntPath.none()

        for iteration in range(cfg.iterations):
            round_paths = self._walk_round(table)

            # Evaporate BEFORE deposit: this round's reinforcement is not decayed
            table.evaporate(cfg.evaporation_rate)
            for candidate in round_paths:
                table.deposit(candidate.path, candidate.total_distance)

            iteration_best = min(round_paths, key=lambda p: p.total_distance, default=None)
            if iteration_best is not None and iteration_best.total_distance < best.total_distance:
                best = iteration_best

            self.valid_path_counts.append(len(round_paths))
            self.best_distance_history.append(best.total_distance)
            logger.debug(
                "iteration %d/%d: %d/%d ants reached %s, best=%.2f",
                iteration + 1, cfg.iterations, len(round_paths),
                cfg.ant_count, self._end_id, best.total_distance,
            )

        self.last_run_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            "PathColony %s → %s: best=%.2f over %d iteration(s) × %d ant(s) in %.2fms",
            self._start_id, self._end_id, best.total_distance,
            max(cfg.iterations, 0), max(cfg.ant_count, 0), self.last_run_ms,
        )
        return best

    def _walk_round(self, table: PheromoneTable) -> List[AntPath]:
        cfg = self._config
        paths: List[AntPath] = []
        for _ in range(cfg.ant_count):
            ant = Ant(
                self._graph, table, self._start_id, self._end_id,
                alpha=cfg.alpha, beta=cfg.beta, rng=self._rng,
            )
            candidate = ant.construct()
            if candidate is not None:
                paths.append(candidate)
        return paths

    def __repr__(self) -> str:
        return (
            f"PathColony({self._start_id!r} → {self._end_id!r}, "
            f"nodes={len(self._graph.nodes)}, edges={len(self._graph.edges)}, "
            f"last_run_ms={self.last_run_ms:.2f})"
        )


def search(
    nodes: Iterable,
    edges: Iterable,
    start_id: str,
    end_id: str,
    config: Optional[ACOConfig] = None,
    rng: Optional[RandomSource] = None,
) -> AntPath:
    """
    Functional entry point: build the graph, run one colony, return the best path.

    Args:
        nodes:    Node instances (or dicts accepted by Node).
        edges:    Edge instances (or dicts accepted by Edge).
        start_id: Start node id.
        end_id:   End node id.
        config:   Optional ACOConfig.
        rng:      Optional RandomSource; overrides config.seed.

    Returns:
        AntPath: the best path, or AntPath.none() if end was never reached.

    Raises:
        GraphValidationError: duplicate node ids, unknown edge endpoints, or
                              non-positive distances.
    """
    graph = Graph.from_parts(nodes, edges)
    return PathColony(graph, start_id, end_id, config=config, rng=rng).run()
