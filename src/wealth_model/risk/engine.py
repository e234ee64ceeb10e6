# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Portfolio risk engine.

Revalues a heterogeneous portfolio and reports NAV, volatility, Sharpe ratio,
VaR, diversification and liquidity.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..montecarlo.random_source import RandomSource, UniformShockSource
from .assets import Asset, ProcessedAsset
from .assumptions import RiskAssumptions
from .metrics import RiskMetrics, revalue_and_score

logger = logging.getLogger(__name__)

# Diversification calibration used by the risk engine. The rebalancing
# evaluator is calibrated separately.
RISK_ENGINE_DIVERSIFICATION_K = 135


@dataclass(frozen=True)
class RiskReport:
    """Revalued assets and their aggregate metrics."""
    assets: List[ProcessedAsset]
    metrics: RiskMetrics

    def assets_frame(self) -> pd.DataFrame:
        """Revalued assets as a DataFrame, one row per asset."""
        return pd.DataFrame([p.to_dict() for p in self.assets])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metrics": self.metrics.to_dict(),
            "assets": [p.to_dict() for p in self.assets],
        }


class PortfolioRiskEngine:
    """Computes risk metrics, including the liquidity ratio, for a portfolio.

    Example:
        >>> engine = PortfolioRiskEngine(random_seed=1)
        >>> report = engine.analyze([Asset("BTC", "crypto", 1, 50000)])
        >>> report.metrics.portfolio_volatility
        0.78
    """

    def __init__(self,
                 assumptions: Optional[RiskAssumptions] = None,
                 diversification_k: float = RISK_ENGINE_DIVERSIFICATION_K,
                 random_seed: Optional[int] = None):
        self.assumptions = assumptions or RiskAssumptions.create_default()
        self.diversification_k = diversification_k
        self.random_seed = random_seed

    def analyze(self,
                assets: Sequence[Asset],
                random_source: Optional[RandomSource] = None,
                live_prices: Optional[Mapping[str, float]] = None,
                expected_return: Optional[float] = None) -> RiskReport:
        """Revalue the portfolio and compute its metrics.

        Args:
            assets: Portfolio snapshot; an empty list yields all-zero metrics
            random_source: Shock source for simulated prices
            live_prices: Optional symbol -> unit price from a price feed
            expected_return: Annual return assumed for the Sharpe ratio

        Returns:
            RiskReport with processed assets and metrics
        """
        processed, metrics = revalue_and_score(
            assets,
            self.diversification_k,
            assumptions=self.assumptions,
            random_source=random_source or UniformShockSource(self.random_seed),
            expected_return=expected_return,
            include_liquidity=True,
            live_prices=live_prices,
        )
        logger.debug(
            "Analyzed %d assets: volatility=%.4f diversification=%d",
            len(processed), metrics.portfolio_volatility, metrics.diversification_score,
        )
        return RiskReport(assets=processed, metrics=metrics)
