# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Optional live market data."""

from .price_feed import AlphaVantagePriceFeed, PriceFeedConfig, Quote

__all__ = ['AlphaVantagePriceFeed', 'PriceFeedConfig', 'Quote']
