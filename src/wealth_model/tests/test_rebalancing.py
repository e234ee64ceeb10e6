# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for the rebalancing evaluator.
"""

import unittest

from ..montecarlo.random_source import SequenceRandomSource
from ..risk.assets import Asset
from ..risk.engine import PortfolioRiskEngine
from ..risk.rebalancing import REBALANCING_DIVERSIFICATION_K, RebalancingEvaluator


class TestRebalancingEvaluator(unittest.TestCase):
    """Tests for RebalancingEvaluator."""

    def setUp(self):
        self.evaluator = RebalancingEvaluator()
        self.assets = [Asset("BTC", "crypto", 1, 10000), Asset("TLT", "bond", 1, 10000)]

    def test_calibration_constant(self):
        self.assertEqual(REBALANCING_DIVERSIFICATION_K, 125)

    def test_diversification_uses_own_calibration(self):
        report = self.evaluator.evaluate(self.assets, random_source=SequenceRandomSource([0.0]))
        risk = PortfolioRiskEngine().analyze(self.assets, random_source=SequenceRandomSource([0.0]))
        # HHI 0.5: 62.5 rounds half up to 63 here, 67.5 to 68 in the risk engine
        self.assertEqual(report.metrics.diversification_score, 63)
        self.assertEqual(risk.metrics.diversification_score, 68)
        self.assertAlmostEqual(report.metrics.portfolio_volatility, risk.metrics.portfolio_volatility)

    def test_no_liquidity_ratio(self):
        report = self.evaluator.evaluate(self.assets, random_source=SequenceRandomSource([0.0]))
        self.assertIsNone(report.metrics.liquidity_ratio)

    def test_allocation_weights(self):
        assets = self.assets + [Asset("ETH", "crypto", 1, 10000)]
        report = self.evaluator.evaluate(assets, random_source=SequenceRandomSource([0.0]))
        self.assertEqual(list(report.allocation), ["crypto", "bond"])
        self.assertAlmostEqual(report.allocation["crypto"], 2 / 3)
        self.assertAlmostEqual(sum(report.allocation.values()), 1.0)

    def test_empty_portfolio(self):
        report = self.evaluator.evaluate([])
        self.assertEqual(report.allocation, {})
        self.assertEqual(report.metrics.diversification_score, 0)
        self.assertEqual(report.metrics.total_nav, 0.0)

    def test_to_dict(self):
        data = self.evaluator.evaluate(self.assets, random_source=SequenceRandomSource([0.0])).to_dict()
        self.assertEqual(set(data), {"metrics", "allocation", "assets"})
        self.assertEqual(len(data["assets"]), 2)


if __name__ == '__main__':
    unittest.main()
