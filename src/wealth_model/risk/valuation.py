# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Asset revaluation.

Without a live quote, each asset's "current" price comes from a single
one-trading-day geometric Brownian motion step off its recorded unit value.
This is a placeholder for live pricing, not a forecast.
"""

import math
from typing import List, Mapping, Optional, Sequence

from .assets import (
    Asset,
    LIQUIDITY_HIGH,
    LIQUIDITY_LOW,
    PRICE_SOURCE_LIVE,
    PRICE_SOURCE_SIMULATED,
    ProcessedAsset,
)
from .assumptions import RiskAssumptions
from ..montecarlo.random_source import RandomSource


def simulate_market_move(base_price: float,
                         volatility: float,
                         shock: float,
                         drift: float,
                         dt: float) -> float:
    """One GBM step: S + S * (mu * dt + sigma * shock * sqrt(dt))."""
    return base_price * (drift * dt + volatility * shock * math.sqrt(dt)) + base_price


def revalue_asset(asset: Asset,
                  assumptions: RiskAssumptions,
                  random_source: RandomSource,
                  live_price: Optional[float] = None) -> ProcessedAsset:
    """Revalue one asset, preferring a live quote when one is supplied."""
    volatility = assumptions.volatility_for(asset.type)
    if live_price is not None and live_price > 0:
        price = float(live_price)
        source = PRICE_SOURCE_LIVE
    else:
        price = simulate_market_move(
            asset.unit_value,
            volatility,
            random_source.next(),
            assumptions.price_drift,
            assumptions.time_step,
        )
        source = PRICE_SOURCE_SIMULATED

    return ProcessedAsset(
        asset=asset,
        current_price=price,
        total_value=price * asset.quantity,
        volatility=volatility,
        liquidity_tier=LIQUIDITY_HIGH if assumptions.is_liquid(asset.type) else LIQUIDITY_LOW,
        price_source=source,
    )


def revalue_assets(assets: Sequence[Asset],
                   assumptions: RiskAssumptions,
                   random_source: RandomSource,
                   live_prices: Optional[Mapping[str, float]] = None) -> List[ProcessedAsset]:
    """Revalue assets in order. live_prices maps symbol -> unit price.

    A live price only applies to asset types in assumptions.quoted_types, so a
    property that shares a ticker's name keeps its simulated price.
    """
    live_prices = live_prices or {}
    return [
        revalue_asset(
            asset,
            assumptions,
            random_source,
            live_prices.get(asset.symbol) if assumptions.is_quoted(asset.type) else None,
        )
        for asset in assets
    ]
