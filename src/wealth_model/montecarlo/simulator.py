# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo projection of a single savings goal.

This module provides the GoalSimulator class which runs many simulated
monthly balance paths under stochastic market returns and summarises them
into a SimulationOutcome.
"""

import logging
import math
from datetime import date
from typing import Optional

import numpy as np

from ..errors import InternalError
from .annuity import inflation_adjusted_target, required_monthly_contribution
from .config import MonteCarloConfig
from .goal import GoalSimulationInput
from .market_assumptions import MarketAssumptions
from .random_source import RandomSource, create_random_source
from .results import SimulationOutcome, scenario_percentiles

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class GoalSimulator:
    """Projects a savings goal with a geometric Brownian motion random walk.

    The workflow:
    1. Clamp the horizon to at least one year and convert it to whole months
    2. Draw a (paths x months) matrix of shocks; row 0 is path 0
    3. Step every path monthly: balance * (1 + drift + shock) + contribution
    4. Summarise final balances into success rate and percentile scenarios
    5. Solve the required monthly contribution in closed form

    Example:
        >>> simulator = GoalSimulator(config=MonteCarloConfig(random_seed=7))
        >>> outcome = simulator.run(goal)
        >>> print(f"Success: {outcome.success_probability:.0f}%")
    """

    def __init__(self,
                 market_assumptions: Optional[MarketAssumptions] = None,
                 config: Optional[MonteCarloConfig] = None):
        """Initialize the simulator.

        Args:
            market_assumptions: Return/volatility/inflation assumptions. If
                               None, uses the default equity assumptions.
            config: Simulation configuration. If None, uses defaults.
        """
        self.market = market_assumptions or MarketAssumptions.create_default()
        self.config = config or MonteCarloConfig()

    def run(self,
            goal: GoalSimulationInput,
            random_source: Optional[RandomSource] = None,
            today: Optional[date] = None) -> SimulationOutcome:
        """Run the simulation for one goal.

        Args:
            goal: Validated goal input
            random_source: Shock source. If None, one is built from the config
                           (seeded when config.random_seed is set).
            today: Reference date for the horizon. Defaults to date.today().

        Returns:
            SimulationOutcome for the goal

        Raises:
            InternalError: If the simulation produced non-finite balances
        """
        source = random_source or create_random_source(
            self.config.shock_distribution, self.config.random_seed
        )
        years = goal.horizon_years(today)
        months = int(math.floor(years * MONTHS_PER_YEAR))
        num_paths = self.config.num_simulations

        shocks = source.draw((num_paths, months))
        balances = np.full(num_paths, float(goal.current_amount))
        trajectory = [float(goal.current_amount)]

        drift = self.market.monthly_drift
        shock_scale = self.market.monthly_shock_scale
        for month in range(months):
            monthly_returns = drift + shock_scale * shocks[:, month]
            balances = balances * (1.0 + monthly_returns) + goal.monthly_contribution
            if (month + 1) % MONTHS_PER_YEAR == 0:
                trajectory.append(float(balances[0]))

        if not np.all(np.isfinite(balances)):
            raise InternalError("goal simulation produced non-finite balances")

        success_count = int(np.count_nonzero(balances >= goal.target_amount))
        success_probability = min(100.0, max(0.0, 100.0 * success_count / num_paths))
        scenarios = scenario_percentiles(balances)

        required = required_monthly_contribution(
            goal.target_amount, goal.current_amount, years, self.market.annual_mean_return
        )
        future_target = inflation_adjusted_target(
            goal.target_amount, years, self.market.inflation_rate
        )

        logger.debug(
            "Simulated %d paths over %d months: success=%.1f%%",
            num_paths, months, success_probability,
        )

        return SimulationOutcome(
            success_probability=success_probability,
            optimistic_scenario=scenarios["optimistic"],
            median_scenario=scenarios["median"],
            pessimistic_scenario=scenarios["pessimistic"],
            chart_trajectory=tuple(trajectory),
            required_monthly_contribution=required,
            inflation_adjusted_target=future_target,
            gap=goal.target_amount - scenarios["median"],
            years=years,
            num_simulations=num_paths,
        )


def simulate_goal(goal: GoalSimulationInput,
                  market_assumptions: Optional[MarketAssumptions] = None,
                  config: Optional[MonteCarloConfig] = None,
                  random_source: Optional[RandomSource] = None,
                  today: Optional[date] = None) -> SimulationOutcome:
    """Project one goal with a fresh GoalSimulator."""
    simulator = GoalSimulator(market_assumptions=market_assumptions, config=config)
    return simulator.run(goal, random_source=random_source, today=today)
