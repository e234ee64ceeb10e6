# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Portfolio risk metrics shared by the risk engine and the rebalancing evaluator.

All ratios are defined as exactly 0 when the portfolio NAV (or volatility)
is 0, so an empty portfolio yields an all-zero metrics record.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ..errors import InternalError
from ..montecarlo.random_source import RandomSource, UniformShockSource
from .assets import Asset, ProcessedAsset
from .assumptions import RiskAssumptions
from .valuation import revalue_assets

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class RiskMetrics:
    """Aggregate risk and efficiency metrics for one portfolio snapshot.

    Attributes:
        total_nav: Sum of revalued asset totals
        portfolio_volatility: NAV-weighted average annualized volatility
        sharpe_ratio: (expected return - risk-free rate) / volatility
        value_at_risk_95_monthly: Parametric one-month 95% VaR in currency
        diversification_score: HHI-based score, integer 0-100
        liquidity_ratio: Percent of NAV in liquid types; None where not computed
    """
    total_nav: float
    portfolio_volatility: float
    sharpe_ratio: float
    value_at_risk_95_monthly: float
    diversification_score: int
    liquidity_ratio: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def total_nav(processed: Sequence[ProcessedAsset]) -> float:
    return float(sum(p.total_value for p in processed))


def portfolio_volatility(processed: Sequence[ProcessedAsset]) -> float:
    """NAV-weighted average of per-asset volatility; 0 for a zero NAV."""
    nav = total_nav(processed)
    if nav == 0:
        return 0.0
    weighted = sum(p.total_value * p.volatility for p in processed)
    return float(weighted / nav)


def sharpe_ratio(expected_return: float, volatility: float, risk_free_rate: float) -> float:
    if volatility == 0:
        return 0.0
    return (expected_return - risk_free_rate) / volatility


def value_at_risk(nav: float, volatility: float, z_score: float) -> float:
    """Parametric VaR over one month: NAV * z * sigma / sqrt(12)."""
    return nav * z_score * (volatility / math.sqrt(MONTHS_PER_YEAR))


def allocation_by_type(processed: Sequence[ProcessedAsset]) -> Dict[str, float]:
    """Share of NAV held in each asset type, in first-seen order."""
    nav = total_nav(processed)
    if not processed or nav == 0:
        return {}
    frame = pd.DataFrame({
        "type": [p.type for p in processed],
        "total_value": [p.total_value for p in processed],
    })
    grouped = frame.groupby("type", sort=False)["total_value"].sum()
    return {str(asset_type): float(value / nav) for asset_type, value in grouped.items()}


def herfindahl_index(weights: Mapping[str, float]) -> float:
    return float(sum(w * w for w in weights.values()))


def diversification_score(processed: Sequence[ProcessedAsset], calibration: float) -> int:
    """Score 0-100 from the Herfindahl index of per-type NAV weights.

    A single-type portfolio (HHI 1.0) scores 0. The calibration constant
    scales (1 - HHI) so that a broad mix of types saturates near 100.
    """
    weights = allocation_by_type(processed)
    if not weights:
        return 0
    hhi = herfindahl_index(weights)
    # Round half up
    score = math.floor((1.0 - hhi) * calibration + 0.5)
    return int(max(0, min(100, score)))


def liquidity_ratio(processed: Sequence[ProcessedAsset]) -> float:
    nav = total_nav(processed)
    if nav == 0:
        return 0.0
    liquid = sum(p.total_value for p in processed if p.is_liquid)
    return float(100.0 * liquid / nav)


def compute_metrics(processed: Sequence[ProcessedAsset],
                    assumptions: RiskAssumptions,
                    diversification_k: float,
                    expected_return: Optional[float] = None,
                    include_liquidity: bool = True) -> RiskMetrics:
    """Aggregate metrics for already revalued assets.

    Raises:
        InternalError: If any metric is not finite
    """
    if expected_return is None:
        expected_return = assumptions.expected_portfolio_return
    nav = total_nav(processed)
    volatility = portfolio_volatility(processed)
    metrics = RiskMetrics(
        total_nav=nav,
        portfolio_volatility=volatility,
        sharpe_ratio=sharpe_ratio(expected_return, volatility, assumptions.risk_free_rate),
        value_at_risk_95_monthly=value_at_risk(nav, volatility, assumptions.var_z_score),
        diversification_score=diversification_score(processed, diversification_k),
        liquidity_ratio=liquidity_ratio(processed) if include_liquidity else None,
    )
    _ensure_finite(metrics)
    return metrics


def _ensure_finite(metrics: RiskMetrics) -> None:
    for name, value in metrics.to_dict().items():
        if value is not None and not math.isfinite(value):
            raise InternalError(f"risk metric {name} is not finite: {value}")


def revalue_and_score(assets: Sequence[Asset],
                      diversification_k: float,
                      assumptions: Optional[RiskAssumptions] = None,
                      random_source: Optional[RandomSource] = None,
                      expected_return: Optional[float] = None,
                      include_liquidity: bool = True,
                      live_prices: Optional[Mapping[str, float]] = None,
                      ) -> Tuple[List[ProcessedAsset], RiskMetrics]:
    """Revalue a portfolio and compute its risk metrics.

    Args:
        assets: Portfolio snapshot; may be empty
        diversification_k: Calibration constant of the diversification score
        assumptions: Risk constants. If None, uses defaults.
        random_source: Shock source for the price simulation. If None, an
                       unseeded uniform source is used.
        expected_return: Annual return for the Sharpe ratio. If None, uses
                         assumptions.expected_portfolio_return.
        include_liquidity: Whether to compute the liquidity ratio
        live_prices: Optional symbol -> unit price overrides

    Returns:
        Tuple of (processed assets, metrics)
    """
    assumptions = assumptions or RiskAssumptions.create_default()
    random_source = random_source or UniformShockSource()
    processed = revalue_assets(assets, assumptions, random_source, live_prices)
    metrics = compute_metrics(
        processed,
        assumptions,
        diversification_k,
        expected_return=expected_return,
        include_liquidity=include_liquidity,
    )
    return processed, metrics
