"""Flask API for goal projection and portfolio risk analysis."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from ..advisor.narrator import GeminiNarrator, Narrative, STATUS_OK
from ..errors import InternalError, InvalidInput, UpstreamUnavailable
from ..market.price_feed import AlphaVantagePriceFeed
from ..montecarlo.config import MonteCarloConfig
from ..montecarlo.goal import GoalSimulationInput
from ..montecarlo.results import SimulationOutcome
from ..montecarlo.simulator import GoalSimulator
from ..parsing import pick_first, to_text
from ..risk.assets import Asset, parse_assets
from ..risk.engine import PortfolioRiskEngine, RiskReport
from ..risk.rebalancing import RebalancingEvaluator, RebalancingReport
from .config import ServiceConfig

logger = logging.getLogger(__name__)

ENGINE_NAME = "wealth-model risk engine"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def _whole(value: float) -> int:
    """Round half up to a whole currency unit."""
    return int(math.floor(value + 0.5))


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        raise InvalidInput("Request JSON body is required")
    if not isinstance(payload, dict):
        raise InvalidInput("Request JSON body must be an object")
    return payload


def _meta(narrative: Narrative) -> Dict[str, Any]:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "engine": ENGINE_NAME,
        "status": "optimized" if narrative.status == STATUS_OK else "degraded",
        "narrative_model": narrative.model_used,
    }


def goal_response(outcome: SimulationOutcome, narrative: Narrative) -> Dict[str, Any]:
    return {
        "success": True,
        "metrics": {
            "success_probability": _whole(outcome.success_probability),
            "projected_value": _whole(outcome.median_scenario),
            "worst_case_value": _whole(outcome.pessimistic_scenario),
            "best_case_value": _whole(outcome.optimistic_scenario),
            "required_monthly_savings": _whole(outcome.required_monthly_contribution),
            "inflation_adjusted_target": _whole(outcome.inflation_adjusted_target),
            "gap_value": _whole(outcome.gap),
            "time_horizon_years": round(outcome.years, 2),
        },
        "chart_data": [
            {"year": year, "balance": _whole(balance)}
            for year, balance in enumerate(outcome.chart_trajectory)
        ],
        "ai_analysis": narrative.payload,
        "ai_status": narrative.status,
    }


def _core_metrics(report: RiskReport | RebalancingReport) -> Dict[str, Any]:
    m = report.metrics
    return {
        "total_nav": round(m.total_nav, 2),
        "sharpe_ratio": round(m.sharpe_ratio, 2),
        "var_95_monthly": round(m.value_at_risk_95_monthly, 2),
        "diversification_score": m.diversification_score,
        "portfolio_volatility": round(m.portfolio_volatility, 4),
    }


def risk_response(report: RiskReport, narrative: Narrative) -> Dict[str, Any]:
    metrics = _core_metrics(report)
    metrics["liquidity_ratio"] = round(report.metrics.liquidity_ratio or 0.0, 1)
    return {
        "success": True,
        "meta": _meta(narrative),
        "metrics": metrics,
        "assets": [p.to_dict() for p in report.assets],
        "risk_officer_insight": narrative.payload,
        "ai_status": narrative.status,
    }


def rebalancing_response(report: RebalancingReport, narrative: Narrative) -> Dict[str, Any]:
    metrics = _core_metrics(report)
    metrics["volatility_annual"] = metrics["portfolio_volatility"]
    metrics["allocation"] = {k: round(v, 4) for k, v in report.allocation.items()}
    return {
        "success": True,
        "meta": _meta(narrative),
        "metrics": metrics,
        "assets": [p.to_dict() for p in report.assets],
        "risk_officer_insight": narrative.payload,
        "ai_status": narrative.status,
    }


def _error(message: str, status: int) -> Tuple[Response, int]:
    return jsonify({"success": False, "error": message}), status


def create_app(config: Optional[ServiceConfig] = None,
               narrator: Optional[GeminiNarrator] = None,
               price_feed: Optional[AlphaVantagePriceFeed] = None,
               today: Callable[[], date] = date.today) -> Flask:
    """Build the Flask app.

    Args:
        config: Service configuration. If None, read from the environment.
        narrator: Narrative collaborator. If None, built from config.advisor.
        price_feed: Quote client. If None, built from config.price_feed.
        today: Clock for goal horizons.
    """
    config = config or ServiceConfig.from_env()
    narrator = narrator or GeminiNarrator(config.advisor)
    price_feed = price_feed or AlphaVantagePriceFeed(config.price_feed)

    app = Flask(__name__)

    def live_prices(assets: List[Asset]) -> Dict[str, float]:
        if not config.use_live_prices:
            return {}
        return price_feed.latest_prices(assets)

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        for header, value in CORS_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.errorhandler(InvalidInput)
    def handle_invalid_input(exc: InvalidInput) -> Tuple[Response, int]:
        return _error(str(exc), 400)

    @app.errorhandler(UpstreamUnavailable)
    def handle_upstream(exc: UpstreamUnavailable) -> Tuple[Response, int]:
        logger.warning("Upstream unavailable: %s", exc)
        return _error(str(exc), 502)

    @app.errorhandler(InternalError)
    def handle_internal(exc: InternalError) -> Tuple[Response, int]:
        logger.error("Internal calculation error: %s", exc)
        return _error("Internal calculation error", 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception) -> Any:
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error: %s", exc)
        return _error("Internal calculation error", 500)

    @app.get("/health")
    def health() -> Tuple[Any, int]:
        return jsonify({
            "ok": True,
            "service": "wealth-analytics-api",
            "narrative_configured": narrator.configured,
            "price_feed_configured": price_feed.configured,
        }), 200

    @app.post("/simulate-goal")
    def simulate_goal() -> Tuple[Any, int]:
        goal = GoalSimulationInput.from_payload(_json_body())
        simulator = GoalSimulator(config=MonteCarloConfig(
            num_simulations=config.num_simulations,
            random_seed=config.simulation_seed,
        ))
        outcome = simulator.run(goal, today=today())
        narrative = narrator.narrate_goal(goal, outcome)
        logger.info(
            "Goal simulated: years=%.2f success=%.1f%% narrative=%s",
            outcome.years, outcome.success_probability, narrative.status,
        )
        return jsonify(goal_response(outcome, narrative)), 200

    @app.post("/analyze-portfolio")
    def analyze_portfolio() -> Tuple[Any, int]:
        assets = parse_assets(_json_body().get("assets"))
        engine = PortfolioRiskEngine(random_seed=config.simulation_seed)
        report = engine.analyze(assets, live_prices=live_prices(assets))
        narrative = narrator.narrate_risk(report)
        logger.info("Portfolio analyzed: assets=%d narrative=%s", len(assets), narrative.status)
        return jsonify(risk_response(report, narrative)), 200

    @app.post("/rebalance-portfolio")
    def rebalance_portfolio() -> Tuple[Any, int]:
        body = _json_body()
        assets = parse_assets(pick_first(body, [["portfolio"], ["assets"]]))
        evaluator = RebalancingEvaluator(random_seed=config.simulation_seed)
        report = evaluator.evaluate(assets, live_prices=live_prices(assets))
        narrative = narrator.narrate_rebalancing(report)
        logger.info("Rebalancing check: assets=%d narrative=%s", len(assets), narrative.status)
        return jsonify(rebalancing_response(report, narrative)), 200

    @app.post("/market-data")
    def market_data() -> Tuple[Any, int]:
        body = _json_body()
        function = to_text(body.get("function"), "GLOBAL_QUOTE").upper()
        if function != "GLOBAL_QUOTE":
            raise InvalidInput(f"Unsupported market data function: {function}")
        quote = price_feed.fetch_quote(to_text(body.get("symbol")))
        return jsonify({"success": True, "quote": quote.to_dict()}), 200

    return app
