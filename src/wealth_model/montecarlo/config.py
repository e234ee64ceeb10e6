# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Configuration for Monte Carlo goal simulations."""

from dataclasses import dataclass
from typing import Optional

SHOCK_DISTRIBUTIONS = ("uniform", "normal")


@dataclass(frozen=True)
class MonteCarloConfig:
    """Configuration for Monte Carlo simulation parameters.
    
    Attributes:
        num_simulations: Number of simulated paths. Default 1000.
        random_seed: Optional seed for reproducible results. Default None.
        shock_distribution: "uniform" draws monthly shocks from [-1, 1]
            (the production behaviour); "normal" draws standard normal
            shocks instead, which widens the outcome tails.
    """
    num_simulations: int = 1000
    random_seed: Optional[int] = None
    shock_distribution: str = "uniform"
    
    def __post_init__(self):
        if self.num_simulations < 1:
            raise ValueError("num_simulations must be at least 1")
        if self.shock_distribution not in SHOCK_DISTRIBUTIONS:
            raise ValueError(
                f"shock_distribution must be one of {SHOCK_DISTRIBUTIONS}, "
                f"got {self.shock_distribution!r}"
            )
