# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Market assumptions used to project savings goals.

A single equity-market return/volatility pair is applied to every goal
regardless of its goal type, plus a flat inflation rate.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MarketAssumptions:
    """Return, volatility and inflation assumptions for goal projections.
    
    Attributes:
        annual_mean_return: Expected annual return as decimal (0.12 = 12%)
        annual_volatility: Annual standard deviation as decimal
        inflation_rate: Annual inflation used for the future-cost target
    """
    annual_mean_return: float = 0.12
    annual_volatility: float = 0.15
    inflation_rate: float = 0.06
    
    def __post_init__(self):
        if self.annual_volatility < 0:
            raise ValueError(f"Volatility cannot be negative: {self.annual_volatility}")
        if self.annual_mean_return <= -1:
            raise ValueError(f"Mean return must be above -100%: {self.annual_mean_return}")
        if self.inflation_rate <= -1:
            raise ValueError(f"Inflation rate must be above -100%: {self.inflation_rate}")
    
    @property
    def monthly_drift(self) -> float:
        """Log-normal GBM drift per month: (mu - sigma^2 / 2) / 12."""
        return (self.annual_mean_return - 0.5 * self.annual_volatility ** 2) / 12.0
    
    @property
    def monthly_shock_scale(self) -> float:
        """Volatility scaled to one month: sigma * sqrt(1/12)."""
        return self.annual_volatility * (1.0 / 12.0) ** 0.5
    
    @classmethod
    def create_default(cls) -> 'MarketAssumptions':
        """Equity-market assumptions: 12% mean return, 15% volatility, 6% inflation."""
        return cls()
