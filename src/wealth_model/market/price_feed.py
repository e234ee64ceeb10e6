# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Live quote client for the Alpha Vantage GLOBAL_QUOTE endpoint.

The feed is optional. Every failure surfaces as UpstreamUnavailable and the
risk endpoints fall back to simulated prices for the affected assets.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import requests

from ..errors import InvalidInput, UpstreamUnavailable
from ..risk.assets import Asset
from ..risk.assumptions import DEFAULT_QUOTED_TYPES

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"

QUOTED_TYPES = DEFAULT_QUOTED_TYPES


@dataclass(frozen=True)
class Quote:
    """Latest quote for one symbol."""
    symbol: str
    price: float
    change: float
    change_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "trend": "up" if self.change >= 0 else "down",
        }


@dataclass
class PriceFeedConfig:
    """Runtime configuration for the price feed."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "PriceFeedConfig":
        """Build configuration from environment variables."""
        return cls(
            api_key=os.getenv("ALPHA_VANTAGE_KEY", "").strip(),
            base_url=(os.getenv("ALPHA_VANTAGE_URL", "").strip() or DEFAULT_BASE_URL).rstrip("/"),
            timeout_seconds=float(os.getenv("PRICE_FEED_TIMEOUT_SECONDS", "10")),
        )


def _percent(raw: Any) -> float:
    return float(str(raw).strip().rstrip("%"))


class AlphaVantagePriceFeed:
    """Fetches single quotes from Alpha Vantage."""

    def __init__(self, config: PriceFeedConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.config.api_key)

    def fetch_quote(self, symbol: str) -> Quote:
        """Fetch the latest quote for symbol.

        Raises:
            InvalidInput: If symbol is blank
            UpstreamUnavailable: If the key is missing, the request fails or
                                 the response has no usable quote
        """
        symbol = (symbol or "").strip()
        if not symbol:
            raise InvalidInput("symbol is required")
        if not self.configured:
            raise UpstreamUnavailable("Alpha Vantage API key not configured")

        params = {"function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": self.config.api_key}
        try:
            response = self.session.get(
                self.config.base_url, params=params, timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"quote request for {symbol} failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamUnavailable(f"quote response for {symbol} is not JSON") from exc

        return self._parse_quote(symbol, payload)

    def _parse_quote(self, symbol: str, payload: Any) -> Quote:
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(f"unexpected quote payload for {symbol}")
        # Throttling and bad-symbol responses come back as 200 with a message
        for key in ("Error Message", "Note", "Information"):
            if key in payload:
                raise UpstreamUnavailable(f"quote for {symbol} rejected: {payload[key]}")

        quote = payload.get("Global Quote")
        if not isinstance(quote, dict) or not quote:
            raise UpstreamUnavailable(f"no quote returned for {symbol}")
        try:
            return Quote(
                symbol=str(quote.get("01. symbol") or symbol),
                price=float(quote["05. price"]),
                change=float(quote.get("09. change", 0.0)),
                change_percent=_percent(quote.get("10. change percent", "0")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailable(f"malformed quote for {symbol}") from exc

    def latest_prices(self, assets: Iterable[Asset]) -> Dict[str, float]:
        """Best-effort live unit prices for quoted asset types.

        Symbols whose quote fails are left out; callers simulate those.
        """
        if not self.configured:
            return {}
        prices: Dict[str, float] = {}
        for asset in assets:
            if asset.type not in QUOTED_TYPES or asset.symbol in prices:
                continue
            try:
                prices[asset.symbol] = self.fetch_quote(asset.symbol).price
            except UpstreamUnavailable as exc:
                logger.warning("Live price unavailable, using simulated price: %s", exc)
        return prices
