"""
aco_core/random_source.py
─────────────────────────
The injectable source of randomness for ant walks.

The engine never calls the process-wide `random` module or numpy's global
state. Every PathColony is handed (or builds) its own RandomSource, so two
searches never share a stream and a test can pin the outcome with a seed.

Anything with a `random() -> float in [0, 1)` method qualifies:
  • numpy.random.Generator   (the default, via make_random_source)
  • random.Random            (stdlib, also fine for callers that prefer it)
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Capability object yielding uniform floats in [0, 1)."""

    def random(self) -> float: ...


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Build a fresh numpy Generator.

    seed=None draws entropy from the OS, so unseeded runs differ from each
    other, matching the behaviour of the interactive map.
    """
    return np.random.default_rng(seed)
