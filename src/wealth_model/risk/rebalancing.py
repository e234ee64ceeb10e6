# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Rebalancing check.

Runs the shared revaluation and metrics over a portfolio snapshot and frames
them as a rebalancing review. The evaluator produces no buy/sell signals of
its own: tactical actions come from the narrative layer. It does expose the
per-type allocation weights behind the diversification score so callers can
see where concentration comes from.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..montecarlo.random_source import RandomSource, UniformShockSource
from .assets import Asset, ProcessedAsset
from .assumptions import RiskAssumptions
from .metrics import RiskMetrics, allocation_by_type, revalue_and_score

logger = logging.getLogger(__name__)

REBALANCING_DIVERSIFICATION_K = 125


@dataclass(frozen=True)
class RebalancingReport:
    """Metrics for a rebalancing review.

    Attributes:
        assets: Revalued assets
        metrics: Risk metrics; liquidity_ratio is not computed here
        allocation: Asset type -> share of NAV (0-1)
    """
    assets: List[ProcessedAsset]
    metrics: RiskMetrics
    allocation: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metrics": self.metrics.to_dict(),
            "allocation": dict(self.allocation),
            "assets": [p.to_dict() for p in self.assets],
        }


class RebalancingEvaluator:
    """Evaluates a portfolio snapshot ahead of a rebalancing decision."""

    def __init__(self,
                 assumptions: Optional[RiskAssumptions] = None,
                 diversification_k: float = REBALANCING_DIVERSIFICATION_K,
                 random_seed: Optional[int] = None):
        self.assumptions = assumptions or RiskAssumptions.create_default()
        self.diversification_k = diversification_k
        self.random_seed = random_seed

    def evaluate(self,
                 assets: Sequence[Asset],
                 random_source: Optional[RandomSource] = None,
                 live_prices: Optional[Mapping[str, float]] = None,
                 expected_return: Optional[float] = None) -> RebalancingReport:
        processed, metrics = revalue_and_score(
            assets,
            self.diversification_k,
            assumptions=self.assumptions,
            random_source=random_source or UniformShockSource(self.random_seed),
            expected_return=expected_return,
            include_liquidity=False,
            live_prices=live_prices,
        )
        logger.debug("Rebalancing check over %d assets", len(processed))
        return RebalancingReport(
            assets=processed,
            metrics=metrics,
            allocation=allocation_by_type(processed),
        )
