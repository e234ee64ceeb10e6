# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Asset input records and their revalued counterparts."""

import math
from dataclasses import dataclass
from typing import Any, Dict, List

from ..errors import InvalidInput
from ..parsing import pick_first, to_float, to_text

OTHER_ASSET_TYPE = "other"

LIQUIDITY_HIGH = "High"
LIQUIDITY_LOW = "Low (Illiquid)"

PRICE_SOURCE_SIMULATED = "simulated"
PRICE_SOURCE_LIVE = "live"


@dataclass(frozen=True)
class Asset:
    """One holding in a portfolio snapshot.

    Attributes:
        symbol: Identifier shown to the user (ticker, property name, ...)
        type: Asset type, e.g. "stock"; unknown types are allowed
        quantity: Units held, non-negative
        unit_value: Price per unit, strictly positive
    """
    symbol: str
    type: str
    quantity: float
    unit_value: float

    def __post_init__(self):
        if not math.isfinite(self.quantity) or self.quantity < 0:
            raise InvalidInput(f"{self.symbol}: quantity must be non-negative, got {self.quantity}")
        if not math.isfinite(self.unit_value) or self.unit_value <= 0:
            raise InvalidInput(f"{self.symbol}: value must be positive, got {self.unit_value}")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'Asset':
        """Build an asset from a request row.

        Accepts "symbol", "name" or "ticker" for the identifier, "value",
        "unit_value" or "price" for the unit price. A missing quantity means
        one unit and a missing type is treated as "other".
        """
        if not isinstance(payload, dict):
            raise InvalidInput("each asset must be an object")
        symbol = to_text(pick_first(payload, [["symbol"], ["name"], ["ticker"]]), "UNKNOWN")
        asset_type = to_text(pick_first(payload, [["type"], ["asset_type"], ["assetType"]]),
                             OTHER_ASSET_TYPE).lower()
        return cls(
            symbol=symbol,
            type=asset_type,
            quantity=to_float(payload.get("quantity"), f"{symbol}.quantity", default=1.0),
            unit_value=to_float(
                pick_first(payload, [["value"], ["unit_value"], ["unitValue"], ["price"]]),
                f"{symbol}.value",
            ),
        )


def parse_assets(rows: Any) -> List[Asset]:
    """Parse the "assets" array of a request body."""
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise InvalidInput("assets must be an array")
    return [Asset.from_payload(row) for row in rows]


@dataclass(frozen=True)
class ProcessedAsset:
    """An asset after revaluation.

    Attributes:
        asset: The input asset
        current_price: Revalued unit price
        total_value: current_price * quantity
        volatility: Annualized volatility looked up for the asset type
        liquidity_tier: LIQUIDITY_HIGH or LIQUIDITY_LOW
        price_source: PRICE_SOURCE_SIMULATED or PRICE_SOURCE_LIVE
    """
    asset: Asset
    current_price: float
    total_value: float
    volatility: float
    liquidity_tier: str
    price_source: str = PRICE_SOURCE_SIMULATED

    @property
    def type(self) -> str:
        return self.asset.type

    @property
    def is_liquid(self) -> bool:
        return self.liquidity_tier == LIQUIDITY_HIGH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.asset.symbol,
            "type": self.asset.type,
            "quantity": self.asset.quantity,
            "value": self.asset.unit_value,
            "current_price": self.current_price,
            "total_value": self.total_value,
            "volatility": self.volatility,
            "liquidity_tier": self.liquidity_tier,
            "price_source": self.price_source,
        }
