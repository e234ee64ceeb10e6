# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for the narrative advisor. The Gemini client is always mocked.
"""

import os
import unittest
from datetime import date
from unittest.mock import Mock, patch

from ..advisor import prompts
from ..advisor.config import AdvisorConfig
from ..advisor.narrator import (
    GeminiNarrator,
    STATUS_MISSING_CREDENTIALS,
    STATUS_OK,
    STATUS_UNAVAILABLE,
    parse_json_object,
)
from ..errors import UpstreamUnavailable
from ..montecarlo.config import MonteCarloConfig
from ..montecarlo.goal import GoalSimulationInput
from ..montecarlo.simulator import simulate_goal
from ..risk.assets import Asset
from ..risk.engine import PortfolioRiskEngine
from ..risk.rebalancing import RebalancingEvaluator


def sample_goal():
    goal = GoalSimulationInput("House", 500000, 10000, 5000, date(2030, 1, 1))
    outcome = simulate_goal(goal, config=MonteCarloConfig(num_simulations=50, random_seed=1),
                            today=date(2025, 1, 1))
    return goal, outcome


def sample_assets():
    return [Asset("BTC", "crypto", 1, 50000), Asset("HOME", "real_estate", 1, 300000)]


def make_narrator(client, **config_kwargs):
    config = AdvisorConfig(gemini_api_key="test-key", **config_kwargs)
    return GeminiNarrator(config, client=client, sleep=Mock())


class TestAdvisorConfig(unittest.TestCase):

    def test_from_env(self):
        env = {
            "GOOGLE_GENAI_API_KEY": "abc",
            "ADVISOR_GEMINI_MODEL": "gemini-2.5-pro",
            "ADVISOR_GEMINI_FALLBACK_MODELS": "gemini-2.5-flash, ,gemini-2.0-flash",
            "ADVISOR_GEMINI_TIMEOUT_MS": "5000",
        }
        with patch.dict(os.environ, env, clear=True):
            config = AdvisorConfig.from_env()
        self.assertEqual(config.gemini_api_key, "abc")
        self.assertEqual(config.gemini_model, "gemini-2.5-pro")
        self.assertEqual(config.fallback_models, ["gemini-2.5-flash", "gemini-2.0-flash"])
        self.assertEqual(config.gemini_timeout_ms, 5000)

    def test_gemini_key_takes_priority(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "one", "GOOGLE_GENAI_API_KEY": "two"},
                        clear=True):
            self.assertEqual(AdvisorConfig.from_env().gemini_api_key, "one")


class TestParseJsonObject(unittest.TestCase):

    def test_plain_json(self):
        self.assertEqual(parse_json_object('{"verdict": "On Track"}'), {"verdict": "On Track"})

    def test_fenced_json(self):
        raw = '```json\n{"risk_grade": "B"}\n```'
        self.assertEqual(parse_json_object(raw), {"risk_grade": "B"})

    def test_invalid_json(self):
        with self.assertRaises(UpstreamUnavailable):
            parse_json_object("The portfolio looks fine.")

    def test_non_object(self):
        with self.assertRaises(UpstreamUnavailable):
            parse_json_object("[1, 2, 3]")


class TestPrompts(unittest.TestCase):

    def test_goal_prompt_mentions_figures(self):
        goal, outcome = sample_goal()
        prompt = prompts.goal_prompt(goal, outcome)
        self.assertIn("'House'", prompt)
        self.assertIn("Required monthly contribution", prompt)
        self.assertIn("verdict", prompt)

    def test_risk_prompt_includes_liquidity(self):
        report = PortfolioRiskEngine(random_seed=1).analyze(sample_assets())
        self.assertIn("Liquidity ratio", prompts.risk_prompt(report))

    def test_placeholders_are_labelled(self):
        for builder in (prompts.goal_placeholder, prompts.risk_placeholder,
                        prompts.rebalancing_placeholder):
            for missing_key in (True, False):
                self.assertEqual(builder(missing_key)["source"], prompts.PLACEHOLDER_SOURCE)


class TestGeminiNarrator(unittest.TestCase):
    """Tests for GeminiNarrator."""

    def test_missing_key_returns_placeholder(self):
        narrator = GeminiNarrator(AdvisorConfig())
        self.assertFalse(narrator.configured)
        narrative = narrator.narrate_goal(*sample_goal())
        self.assertEqual(narrative.status, STATUS_MISSING_CREDENTIALS)
        self.assertTrue(narrative.is_placeholder)
        self.assertEqual(narrative.payload["verdict"], "API Key Missing")

    def test_successful_generation(self):
        client = Mock()
        client.models.generate_content.return_value = Mock(
            text='```json\n{"verdict": "On Track", "recommendations": []}\n```'
        )
        narrative = make_narrator(client).narrate_goal(*sample_goal())
        self.assertEqual(narrative.status, STATUS_OK)
        self.assertEqual(narrative.payload["verdict"], "On Track")
        self.assertEqual(narrative.model_used, "gemini-2.5-flash")
        _, kwargs = client.models.generate_content.call_args
        self.assertEqual(kwargs["model"], "gemini-2.5-flash")

    def test_failure_returns_unavailable_placeholder(self):
        client = Mock()
        client.models.generate_content.side_effect = RuntimeError("500 INTERNAL")
        report = PortfolioRiskEngine(random_seed=2).analyze(sample_assets())
        narrative = make_narrator(client, fallback_models=["gemini-2.0-flash"]).narrate_risk(report)
        self.assertEqual(narrative.status, STATUS_UNAVAILABLE)
        self.assertEqual(narrative.payload["source"], "placeholder")
        # Non-404 errors do not try the fallback model
        self.assertEqual(client.models.generate_content.call_count, 1)

    def test_unparseable_reply_returns_placeholder(self):
        client = Mock()
        client.models.generate_content.return_value = Mock(text="Sell everything.")
        report = RebalancingEvaluator(random_seed=2).evaluate(sample_assets())
        narrative = make_narrator(client).narrate_rebalancing(report)
        self.assertEqual(narrative.status, STATUS_UNAVAILABLE)
        self.assertEqual(narrative.payload["risk_assessment"], "Unknown")

    def test_empty_reply_returns_placeholder(self):
        client = Mock()
        client.models.generate_content.return_value = Mock(text="")
        narrative = make_narrator(client).narrate_goal(*sample_goal())
        self.assertEqual(narrative.status, STATUS_UNAVAILABLE)

    def test_falls_back_on_missing_model(self):
        client = Mock()
        client.models.generate_content.side_effect = [
            RuntimeError("404 NOT_FOUND: model not found"),
            Mock(text='{"executive_summary": "ok"}'),
        ]
        report = PortfolioRiskEngine(random_seed=2).analyze(sample_assets())
        narrator = make_narrator(client, fallback_models=["gemini-2.0-flash"])
        narrative = narrator.narrate_risk(report)
        self.assertEqual(narrative.status, STATUS_OK)
        self.assertEqual(narrative.model_used, "gemini-2.0-flash")

    def test_retries_once_on_rate_limit(self):
        client = Mock()
        client.models.generate_content.side_effect = [
            RuntimeError("429 RESOURCE_EXHAUSTED"),
            Mock(text='{"verdict": "Needs Optimization"}'),
        ]
        narrator = make_narrator(client)
        narrative = narrator.narrate_goal(*sample_goal())
        self.assertEqual(narrative.status, STATUS_OK)
        narrator._sleep.assert_called_once_with(4.0)

    def test_gives_up_after_second_rate_limit(self):
        client = Mock()
        client.models.generate_content.side_effect = RuntimeError("429 RESOURCE_EXHAUSTED")
        narrative = make_narrator(client).narrate_goal(*sample_goal())
        self.assertEqual(narrative.status, STATUS_UNAVAILABLE)
        self.assertEqual(client.models.generate_content.call_count, 2)


if __name__ == '__main__':
    unittest.main()
