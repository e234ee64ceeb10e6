# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Risk assumptions for portfolio revaluation and metrics.

Holds the annualized volatility surface per asset type, the liquidity
classification and the constants used by the Sharpe ratio and VaR. One
immutable record is passed into every computation instead of module globals.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple, Union


class AssetType(str, Enum):
    """Asset types with a calibrated volatility."""
    CRYPTO = "crypto"
    DEFI = "defi"
    STOCK = "stock"
    REAL_ESTATE = "real_estate"
    BOND = "bond"
    CASH = "cash"
    COLLECTIBLES = "collectibles"


# Annualized standard deviation per asset type
DEFAULT_VOLATILITY_SURFACE = MappingProxyType({
    AssetType.CRYPTO.value: 0.78,
    AssetType.DEFI.value: 0.95,
    AssetType.STOCK.value: 0.18,
    AssetType.REAL_ESTATE.value: 0.08,  # appraisal-smoothed
    AssetType.BOND.value: 0.05,
    AssetType.CASH.value: 0.005,
    AssetType.COLLECTIBLES.value: 0.25,
})

DEFAULT_LIQUID_TYPES = frozenset({
    AssetType.STOCK.value,
    AssetType.CRYPTO.value,
    AssetType.CASH.value,
    AssetType.BOND.value,
})

# Asset types with exchange quotes
DEFAULT_QUOTED_TYPES = frozenset({AssetType.STOCK.value})


@dataclass(frozen=True)
class RiskAssumptions:
    """Constants for the valuation and risk-metrics module.

    Attributes:
        volatility_surface: Asset type -> annualized volatility. Accepts a
            mapping; stored as sorted (type, volatility) pairs so the record
            stays hashable. Read it through the surface property.
        default_volatility: Volatility for types missing from the surface
        risk_free_rate: Annual risk-free rate (10-year treasury benchmark)
        var_z_score: z-score for 95% one-sided VaR
        price_drift: Annual drift of the one-step price simulation
        time_step: Length of the price simulation step in years (one trading day)
        expected_portfolio_return: Flat annual return used for the Sharpe ratio
        liquid_types: Asset types counted as liquid
        quoted_types: Asset types whose live quotes may replace the simulated price
    """
    volatility_surface: Union[Mapping[str, float], Tuple[Tuple[str, float], ...]] = tuple(
        sorted(DEFAULT_VOLATILITY_SURFACE.items())
    )
    default_volatility: float = 0.20
    risk_free_rate: float = 0.045
    var_z_score: float = 1.65
    price_drift: float = 0.05
    time_step: float = 1.0 / 252.0
    expected_portfolio_return: float = 0.08
    liquid_types: FrozenSet[str] = DEFAULT_LIQUID_TYPES
    quoted_types: FrozenSet[str] = DEFAULT_QUOTED_TYPES

    def __post_init__(self):
        pairs = tuple(sorted(dict(self.volatility_surface).items()))
        negative = {k: v for k, v in pairs if v < 0}
        if negative:
            raise ValueError(f"Volatility cannot be negative: {negative}")
        if self.default_volatility < 0:
            raise ValueError(f"Volatility cannot be negative: {self.default_volatility}")
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive: {self.time_step}")
        object.__setattr__(self, "volatility_surface", pairs)
        object.__setattr__(self, "liquid_types", frozenset(self.liquid_types))
        object.__setattr__(self, "quoted_types", frozenset(self.quoted_types))

    @property
    def surface(self) -> Mapping[str, float]:
        """Read-only view of the volatility surface."""
        return MappingProxyType(dict(self.volatility_surface))

    def volatility_for(self, asset_type: str) -> float:
        """Annualized volatility for an asset type; never fails."""
        return float(self.surface.get(asset_type, self.default_volatility))

    def is_liquid(self, asset_type: str) -> bool:
        return asset_type in self.liquid_types

    def is_quoted(self, asset_type: str) -> bool:
        return asset_type in self.quoted_types

    @classmethod
    def create_default(cls) -> 'RiskAssumptions':
        return cls()
