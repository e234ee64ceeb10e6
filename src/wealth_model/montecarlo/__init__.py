# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo goal projection module.

This module projects a savings goal under stochastic monthly returns and
derives its success probability, percentile outcomes and the required
monthly contribution.
"""

from .config import MonteCarloConfig
from .market_assumptions import MarketAssumptions
from .random_source import (
    RandomSource,
    UniformShockSource,
    NormalShockSource,
    SequenceRandomSource,
    create_random_source,
)
from .goal import GoalSimulationInput
from .annuity import required_monthly_contribution, inflation_adjusted_target
from .results import SimulationOutcome
from .simulator import GoalSimulator, simulate_goal

__all__ = [
    'MonteCarloConfig',
    'MarketAssumptions',
    'RandomSource',
    'UniformShockSource',
    'NormalShockSource',
    'SequenceRandomSource',
    'create_random_source',
    'GoalSimulationInput',
    'required_monthly_contribution',
    'inflation_adjusted_target',
    'SimulationOutcome',
    'GoalSimulator',
    'simulate_goal',
]
