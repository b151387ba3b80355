"""
aco_core — Ant Colony Optimisation path-search core.

Public API:
    search()            — one-call search over a node/edge set, returns AntPath
    PathColony          — the colony itself, with per-iteration history
    ACOConfig           — ant count, α, β, ρ, iterations, seed
    RandomSource        — protocol for the injectable random source
    make_random_source  — default numpy Generator factory

Usage:
    from aco_core import ACOConfig, search

    best = search(nodes, edges, "MR1", "CT1", config=ACOConfig(seed=1))
    if best.found:
        draw(best.path)
"""

from aco_core.colony import PathColony, search
from aco_core.config import ACOConfig
from aco_core.random_source import RandomSource, make_random_source

__all__ = ["ACOConfig", "PathColony", "RandomSource", "make_random_source", "search"]
