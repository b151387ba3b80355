"""
aco_core/config.py
──────────────────
ACOConfig: the numeric knobs of one search run.

Every field defaults to the module-level constant it mirrors, so
`ACOConfig()` is the interactive map's configuration:
50 ants × 20 iterations, α = 1, β = 5, ρ = 0.5.

Non-positive ant_count / iterations are accepted on purpose: a run with
zero ants or zero iterations is a defined, if useless, configuration that
returns the "no path" sentinel.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from aco_core.ant import ALPHA, BETA
from aco_core.pheromone import EVAPORATION_RATE

N_ANTS: int = 50
"""Ants per iteration. Each ant is one independent sample of a path."""

N_ITERATIONS: int = 20
"""Rounds of walk → evaporate → deposit."""


class ACOConfig(BaseModel):
    """
    Fields:
        ant_count        → Ants per iteration.
        alpha            → Pheromone exponent.
        beta             → Visibility exponent.
        evaporation_rate → Fraction of pheromone lost per iteration, in [0, 1].
        iterations       → Number of rounds.
        seed             → Seed for the default random source. Ignored when a
                           RandomSource is passed to the colony explicitly.
    """
    model_config = ConfigDict(frozen=True)

    ant_count: int = Field(N_ANTS, description="Ants per iteration")
    alpha: float = Field(ALPHA, description="Pheromone influence exponent")
    beta: float = Field(BETA, description="Visibility (1/distance) exponent")
    evaporation_rate: float = Field(
        EVAPORATION_RATE, ge=0.0, le=1.0,
        description="Fraction of pheromone lost per iteration",
    )
    iterations: int = Field(N_ITERATIONS, description="Number of iterations")
    seed: Optional[int] = Field(None, description="Seed for the default random source")
