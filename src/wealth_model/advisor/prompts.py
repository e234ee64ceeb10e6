"""Prompt builders and placeholder narratives for the advisor."""

from __future__ import annotations

import json
from typing import Any, Dict

from ..montecarlo.goal import GoalSimulationInput
from ..montecarlo.results import SimulationOutcome
from ..risk.engine import RiskReport
from ..risk.rebalancing import RebalancingReport

PLACEHOLDER_SOURCE = "placeholder"
MISSING_KEY_HINT = "Configure GEMINI_API_KEY to enable advisory commentary."


def goal_prompt(goal: GoalSimulationInput, outcome: SimulationOutcome) -> str:
    gap = outcome.gap
    return (
        f"Act as a Senior Wealth Manager. Analyze this client's '{goal.title}' goal.\n\n"
        "Quantitative data:\n"
        f"- Goal type: {goal.goal_type}\n"
        f"- Time horizon: {outcome.years:.1f} years\n"
        f"- Success probability: {outcome.success_probability:.1f}% (Monte Carlo)\n"
        f"- Current monthly contribution: {goal.monthly_contribution:,.0f}\n"
        f"- Required monthly contribution: {outcome.required_monthly_contribution:,.0f}\n"
        f"- Projected {'surplus' if gap < 0 else 'shortfall'}: {abs(gap):,.0f}\n"
        f"- Inflation impact: a target of {goal.target_amount:,.0f} will cost "
        f"{outcome.inflation_adjusted_target:,.0f} in future value.\n\n"
        "Task:\n"
        '1. Give a 1-sentence verdict (e.g. "On Track", "Critical Shortfall", '
        '"Needs Optimization").\n'
        "2. Provide 3 specific, math-backed recommendations to fix the plan.\n"
        "3. Be direct. If they need to increase savings, say exactly by how much.\n\n"
        "Output one JSON object:\n"
        '{"verdict": "string", "recommendations": ["string", "string", "string"], '
        '"investment_strategy_suggestion": "string", "tone": "string"}'
    )


def risk_prompt(report: RiskReport) -> str:
    m = report.metrics
    allocation = [
        {"type": p.type, "value": round(p.total_value, 2), "volatility": p.volatility}
        for p in report.assets
    ]
    return (
        "You are the Chief Risk Officer of a rigorous wealth management firm.\n"
        "Analyze this client portfolio using the computed quantitative metrics.\n\n"
        "Quantitative risk profile:\n"
        f"- Total NAV: {m.total_nav:,.2f}\n"
        f"- Liquidity ratio: {(m.liquidity_ratio or 0.0):.1f}% (target: >80% for flexibility)\n"
        f"- Diversification score: {m.diversification_score}/100 (HHI-based)\n"
        f"- Sharpe ratio: {m.sharpe_ratio:.2f} (benchmark: >1.0 is efficient)\n"
        f"- 95% monthly VaR: {m.value_at_risk_95_monthly:,.2f}\n"
        f"- Portfolio volatility (annualized): {m.portfolio_volatility * 100:.1f}%\n\n"
        f"Asset allocation:\n{json.dumps(allocation)}\n\n"
        "Your mission:\n"
        "1. Executive summary: a 2-sentence assessment of the portfolio's efficiency.\n"
        '2. Identify 3 specific structural flaws (e.g. "cash drag", "crypto over-exposure", '
        '"illiquidity trap").\n'
        "3. Suggest one pair trade (sell X, buy Y) to improve the Sharpe ratio.\n\n"
        "Output one JSON object:\n"
        '{"executive_summary": "string", "inefficiencies": ["string", "string", "string"], '
        '"rebalancing_strategy": "string", "risk_grade": "A" | "B" | "C" | "D" | "F"}'
    )


def rebalancing_prompt(report: RebalancingReport) -> str:
    m = report.metrics
    holdings = [
        {"s": p.asset.symbol, "t": p.type, "v": round(p.total_value, 2)} for p in report.assets
    ]
    return (
        "You are the Chief Risk Officer of a sophisticated wealth management firm.\n"
        "Analyze this client portfolio ahead of a rebalancing decision.\n\n"
        "Portfolio data:\n"
        f"- Total NAV: {m.total_nav:,.2f}\n"
        f"- Diversification score: {m.diversification_score}/100 (HHI-based)\n"
        f"- Portfolio volatility: {m.portfolio_volatility * 100:.1f}%\n"
        f"- Sharpe ratio: {m.sharpe_ratio:.2f} (benchmark: >1.0 is good)\n"
        f"- 95% monthly VaR: {m.value_at_risk_95_monthly:,.2f}\n"
        f"- Allocation by type: {json.dumps({k: round(v, 4) for k, v in report.allocation.items()})}\n"
        f"- Assets: {json.dumps(holdings)}\n\n"
        "Your task:\n"
        "1. Executive summary: a concise, professional assessment of portfolio health.\n"
        "2. Critical vulnerabilities: identify specific risks.\n"
        "3. Tactical moves: suggest 2 specific rebalancing actions to improve the Sharpe ratio.\n\n"
        "Output one JSON object:\n"
        '{"executive_summary": "string", '
        '"risk_assessment": "Low" | "Moderate" | "High" | "Critical", '
        '"vulnerabilities": ["string", "string"], "tactical_actions": ["string", "string"]}'
    )


def goal_placeholder(missing_key: bool) -> Dict[str, Any]:
    if missing_key:
        return {
            "verdict": "API Key Missing",
            "recommendations": [MISSING_KEY_HINT],
            "investment_strategy_suggestion": "System Alert",
            "tone": "warning",
            "source": PLACEHOLDER_SOURCE,
        }
    return {
        "verdict": "Analysis Pending",
        "recommendations": [],
        "investment_strategy_suggestion": "Review inputs",
        "tone": "neutral",
        "source": PLACEHOLDER_SOURCE,
    }


def risk_placeholder(missing_key: bool) -> Dict[str, Any]:
    if missing_key:
        return {
            "executive_summary": f"System Alert: advisory model is not configured. {MISSING_KEY_HINT}",
            "inefficiencies": ["API Key Missing"],
            "rebalancing_strategy": "Hold current positions",
            "risk_grade": "F",
            "source": PLACEHOLDER_SOURCE,
        }
    return {
        "executive_summary": "AI risk analysis currently unavailable.",
        "inefficiencies": ["Analysis pending"],
        "rebalancing_strategy": "Hold current positions",
        "risk_grade": "C",
        "source": PLACEHOLDER_SOURCE,
    }


def rebalancing_placeholder(missing_key: bool) -> Dict[str, Any]:
    if missing_key:
        return {
            "executive_summary": f"System Alert: advisory model is not configured. {MISSING_KEY_HINT}",
            "risk_assessment": "High",
            "vulnerabilities": [],
            "tactical_actions": [MISSING_KEY_HINT],
            "source": PLACEHOLDER_SOURCE,
        }
    return {
        "executive_summary": "AI risk analysis currently unavailable.",
        "risk_assessment": "Unknown",
        "vulnerabilities": [],
        "tactical_actions": [],
        "source": PLACEHOLDER_SOURCE,
    }
