# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Portfolio valuation and risk metrics.

One shared module (valuation + metrics) consumed by two entry points: the
portfolio risk engine and the rebalancing evaluator.
"""

from .assumptions import AssetType, RiskAssumptions
from .assets import Asset, ProcessedAsset, parse_assets
from .valuation import simulate_market_move, revalue_assets
from .metrics import (
    RiskMetrics,
    allocation_by_type,
    diversification_score,
    herfindahl_index,
    revalue_and_score,
    sharpe_ratio,
    value_at_risk,
)
from .engine import PortfolioRiskEngine, RiskReport
from .rebalancing import RebalancingEvaluator, RebalancingReport

__all__ = [
    'AssetType',
    'RiskAssumptions',
    'Asset',
    'ProcessedAsset',
    'parse_assets',
    'simulate_market_move',
    'revalue_assets',
    'RiskMetrics',
    'allocation_by_type',
    'diversification_score',
    'herfindahl_index',
    'revalue_and_score',
    'sharpe_ratio',
    'value_at_risk',
    'PortfolioRiskEngine',
    'RiskReport',
    'RebalancingEvaluator',
    'RebalancingReport',
]
