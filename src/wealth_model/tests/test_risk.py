# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for portfolio revaluation and the risk engine.
"""

import copy
import dataclasses
import math
import unittest

from ..errors import InvalidInput
from ..montecarlo.random_source import SequenceRandomSource
from ..risk.assets import LIQUIDITY_HIGH, LIQUIDITY_LOW, Asset, parse_assets
from ..risk.assumptions import AssetType, RiskAssumptions
from ..risk.engine import PortfolioRiskEngine
from ..risk.metrics import herfindahl_index, sharpe_ratio, value_at_risk
from ..risk.valuation import simulate_market_move

# One-day GBM step with a zero shock
FLAT_MOVE = 1.0 + 0.05 / 252.0


def flat_source():
    return SequenceRandomSource([0.0])


class TestRiskAssumptions(unittest.TestCase):
    """Tests for RiskAssumptions."""

    def test_volatility_surface(self):
        assumptions = RiskAssumptions.create_default()
        self.assertEqual(assumptions.volatility_for(AssetType.CRYPTO.value), 0.78)
        self.assertEqual(assumptions.volatility_for("cash"), 0.005)
        self.assertEqual(assumptions.volatility_for("vintage_cars"), 0.20)

    def test_liquid_types(self):
        assumptions = RiskAssumptions()
        self.assertTrue(assumptions.is_liquid("bond"))
        self.assertFalse(assumptions.is_liquid("real_estate"))
        self.assertFalse(assumptions.is_liquid("collectibles"))

    def test_negative_volatility_raises(self):
        with self.assertRaises(ValueError):
            RiskAssumptions(volatility_surface={"stock": -0.1})

    def test_surface_is_read_only(self):
        assumptions = RiskAssumptions(volatility_surface={"stock": 0.2})
        self.assertEqual(assumptions.volatility_surface, (("stock", 0.2),))
        with self.assertRaises(TypeError):
            assumptions.surface["stock"] = 0.5

    def test_hashable_and_copyable(self):
        assumptions = RiskAssumptions.create_default()
        self.assertEqual(hash(assumptions), hash(RiskAssumptions()))
        self.assertEqual(copy.deepcopy(assumptions), assumptions)
        data = dataclasses.asdict(assumptions)
        self.assertEqual(dict(data["volatility_surface"])["crypto"], 0.78)

    def test_quoted_types(self):
        assumptions = RiskAssumptions()
        self.assertTrue(assumptions.is_quoted("stock"))
        self.assertFalse(assumptions.is_quoted("real_estate"))


class TestAssets(unittest.TestCase):

    def test_zero_quantity_allowed(self):
        self.assertEqual(Asset("AAPL", "stock", 0, 150).quantity, 0)

    def test_non_positive_value_raises(self):
        with self.assertRaises(InvalidInput):
            Asset("AAPL", "stock", 1, 0)

    def test_negative_quantity_raises(self):
        with self.assertRaises(InvalidInput):
            Asset("AAPL", "stock", -1, 100)

    def test_parse_frontend_rows(self):
        assets = parse_assets([{"name": "Equity", "value": 12000, "color": "#123456"}])
        self.assertEqual(assets[0].symbol, "Equity")
        self.assertEqual(assets[0].type, "other")
        self.assertEqual(assets[0].quantity, 1.0)

    def test_parse_type_is_lowercased(self):
        assets = parse_assets([{"symbol": "BTC", "type": "Crypto", "quantity": "0.5", "value": 60000}])
        self.assertEqual(assets[0].type, "crypto")
        self.assertEqual(assets[0].quantity, 0.5)

    def test_parse_requires_list(self):
        self.assertEqual(parse_assets(None), [])
        with self.assertRaises(InvalidInput):
            parse_assets({"symbol": "BTC"})

    def test_parse_missing_value(self):
        with self.assertRaises(InvalidInput):
            parse_assets([{"symbol": "BTC", "type": "crypto"}])


class TestMetricHelpers(unittest.TestCase):

    def test_market_move(self):
        self.assertAlmostEqual(simulate_market_move(100, 0.2, 0.0, 0.05, 1 / 252), 100 * FLAT_MOVE)
        up = simulate_market_move(100, 0.2, 1.0, 0.05, 1 / 252)
        self.assertAlmostEqual(up, 100 * FLAT_MOVE + 100 * 0.2 * math.sqrt(1 / 252))

    def test_sharpe_zero_volatility(self):
        self.assertEqual(sharpe_ratio(0.08, 0.0, 0.045), 0.0)

    def test_value_at_risk(self):
        self.assertAlmostEqual(value_at_risk(1000, 0.12, 1.65), 1000 * 1.65 * 0.12 / math.sqrt(12))

    def test_herfindahl(self):
        self.assertAlmostEqual(herfindahl_index({"a": 0.5, "b": 0.5}), 0.5)


class TestPortfolioRiskEngine(unittest.TestCase):
    """Tests for PortfolioRiskEngine."""

    def setUp(self):
        self.engine = PortfolioRiskEngine()

    def test_cash_only(self):
        report = self.engine.analyze([Asset("USD", "cash", 1000, 1)], random_source=flat_source())
        m = report.metrics
        self.assertAlmostEqual(m.total_nav, 1000 * FLAT_MOVE)
        self.assertEqual(m.diversification_score, 0)
        self.assertAlmostEqual(m.portfolio_volatility, 0.005)
        self.assertAlmostEqual(m.liquidity_ratio, 100.0)
        self.assertAlmostEqual(m.sharpe_ratio, (0.08 - 0.045) / 0.005)

    def test_crypto_and_bond_split(self):
        assets = [Asset("BTC", "crypto", 1, 10000), Asset("TLT", "bond", 1, 10000)]
        m = self.engine.analyze(assets, random_source=flat_source()).metrics
        # HHI 0.5 -> 0.5 * 135 = 67.5, rounded half up
        self.assertEqual(m.diversification_score, 68)
        self.assertAlmostEqual(m.portfolio_volatility, (0.78 + 0.05) / 2)
        self.assertAlmostEqual(m.value_at_risk_95_monthly,
                               m.total_nav * 1.65 * m.portfolio_volatility / math.sqrt(12))

    def test_five_types_saturate(self):
        assets = [Asset(t, t, 1, 1000) for t in ("stock", "bond", "cash", "real_estate", "crypto")]
        m = self.engine.analyze(assets, random_source=flat_source()).metrics
        self.assertEqual(m.diversification_score, 100)

    def test_illiquid_half(self):
        assets = [Asset("HOME", "real_estate", 1, 5000), Asset("VTI", "stock", 10, 500)]
        report = self.engine.analyze(assets, random_source=flat_source())
        self.assertAlmostEqual(report.metrics.liquidity_ratio, 50.0)
        self.assertEqual(report.assets[0].liquidity_tier, LIQUIDITY_LOW)
        self.assertEqual(report.assets[1].liquidity_tier, LIQUIDITY_HIGH)

    def test_empty_portfolio(self):
        m = self.engine.analyze([]).metrics
        self.assertEqual(m.total_nav, 0.0)
        self.assertEqual(m.portfolio_volatility, 0.0)
        self.assertEqual(m.sharpe_ratio, 0.0)
        self.assertEqual(m.value_at_risk_95_monthly, 0.0)
        self.assertEqual(m.diversification_score, 0)
        self.assertEqual(m.liquidity_ratio, 0.0)

    def test_all_zero_quantities(self):
        m = self.engine.analyze([Asset("A", "stock", 0, 100)], random_source=flat_source()).metrics
        self.assertEqual(m.total_nav, 0.0)
        self.assertEqual(m.portfolio_volatility, 0.0)
        self.assertEqual(m.sharpe_ratio, 0.0)
        self.assertEqual(m.value_at_risk_95_monthly, 0.0)
        self.assertEqual(m.liquidity_ratio, 0.0)
        self.assertEqual(m.diversification_score, 0)

    def test_unknown_type_uses_default_volatility(self):
        report = self.engine.analyze([Asset("ART", "painting", 1, 100)], random_source=flat_source())
        processed = report.assets[0]
        self.assertEqual(processed.type, "painting")
        self.assertEqual(processed.volatility, 0.20)
        self.assertFalse(processed.is_liquid)

    def test_zero_quantity_contributes_nothing(self):
        assets = [Asset("AAPL", "stock", 0, 150), Asset("USD", "cash", 100, 1)]
        m = self.engine.analyze(assets, random_source=flat_source()).metrics
        self.assertAlmostEqual(m.total_nav, 100 * FLAT_MOVE)
        self.assertEqual(m.diversification_score, 0)

    def test_shocks_consumed_in_asset_order(self):
        assets = [Asset("A", "stock", 1, 100), Asset("B", "stock", 1, 100)]
        report = self.engine.analyze(assets, random_source=SequenceRandomSource([1.0, -1.0]))
        self.assertGreater(report.assets[0].current_price, 100)
        self.assertLess(report.assets[1].current_price, 100)

    def test_live_price_overrides_simulation(self):
        assets = [Asset("AAPL", "stock", 10, 150)]
        report = self.engine.analyze(assets, random_source=flat_source(),
                                     live_prices={"AAPL": 200.0})
        processed = report.assets[0]
        self.assertEqual(processed.current_price, 200.0)
        self.assertEqual(processed.total_value, 2000.0)
        self.assertEqual(processed.price_source, "live")

    def test_live_price_ignored_for_unquoted_type(self):
        assets = [Asset("AAPL", "stock", 1, 150), Asset("AAPL", "real_estate", 1, 300000)]
        report = self.engine.analyze(assets, random_source=flat_source(),
                                     live_prices={"AAPL": 200.0})
        self.assertEqual(report.assets[0].price_source, "live")
        self.assertEqual(report.assets[1].price_source, "simulated")
        self.assertAlmostEqual(report.assets[1].current_price, 300000 * FLAT_MOVE)

    def test_expected_return_override(self):
        m = self.engine.analyze([Asset("VTI", "stock", 1, 100)], random_source=flat_source(),
                                expected_return=0.18).metrics
        self.assertAlmostEqual(m.sharpe_ratio, (0.18 - 0.045) / 0.18)

    def test_seeded_engine_repeats(self):
        assets = [Asset("BTC", "crypto", 1, 50000)]
        first = PortfolioRiskEngine(random_seed=4).analyze(assets)
        second = PortfolioRiskEngine(random_seed=4).analyze(assets)
        self.assertEqual(first.metrics.total_nav, second.metrics.total_nav)

    def test_assets_frame(self):
        report = self.engine.analyze([Asset("BTC", "crypto", 2, 100)], random_source=flat_source())
        df = report.assets_frame()
        self.assertEqual(len(df), 1)
        self.assertIn("total_value", df.columns)
        self.assertEqual(report.to_dict()["metrics"]["diversification_score"], 0)


if __name__ == '__main__':
    unittest.main()
