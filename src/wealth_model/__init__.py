# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Wealth Analytics Engine

Quantitative core of a personal finance platform: Monte Carlo projection of
savings goals, portfolio revaluation with risk metrics, and a rebalancing
review, with optional narrative commentary and live quotes.

Example usage:
    from datetime import date
    from wealth_model import GoalSimulationInput, GoalSimulator, MonteCarloConfig
    from wealth_model import Asset, PortfolioRiskEngine

    goal = GoalSimulationInput(title='House', target_amount=500000,
                               current_amount=10000, monthly_contribution=5000,
                               target_date=date(2030, 1, 1))
    outcome = GoalSimulator(config=MonteCarloConfig(random_seed=7)).run(goal)
    df = outcome.chart_frame()

    report = PortfolioRiskEngine().analyze([Asset('BTC', 'crypto', 1, 50000),
                                            Asset('TLT', 'bond', 100, 90)])
    print(report.metrics.diversification_score)
"""

from .__meta__ import __version__

# Errors
from .errors import WealthModelError, InvalidInput, UpstreamUnavailable, InternalError

# Goal simulation
from .montecarlo.config import MonteCarloConfig
from .montecarlo.market_assumptions import MarketAssumptions
from .montecarlo.goal import GoalSimulationInput
from .montecarlo.results import SimulationOutcome
from .montecarlo.simulator import GoalSimulator, simulate_goal

# Portfolio risk
from .risk.assumptions import AssetType, RiskAssumptions
from .risk.assets import Asset, ProcessedAsset, parse_assets
from .risk.metrics import RiskMetrics
from .risk.engine import PortfolioRiskEngine, RiskReport
from .risk.rebalancing import RebalancingEvaluator, RebalancingReport

__all__ = [
    '__version__',
    'WealthModelError',
    'InvalidInput',
    'UpstreamUnavailable',
    'InternalError',
    'MonteCarloConfig',
    'MarketAssumptions',
    'GoalSimulationInput',
    'SimulationOutcome',
    'GoalSimulator',
    'simulate_goal',
    'AssetType',
    'RiskAssumptions',
    'Asset',
    'ProcessedAsset',
    'parse_assets',
    'RiskMetrics',
    'PortfolioRiskEngine',
    'RiskReport',
    'RebalancingEvaluator',
    'RebalancingReport',
]
