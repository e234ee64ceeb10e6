"""
Narrative commentary over computed metrics, generated with Gemini.

The numbers are always computed first and never depend on this layer. When
the API key is missing or generation fails, a placeholder narrative labelled
with source="placeholder" is returned instead and the status says why.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from google import genai
from google.genai import types

from ..errors import UpstreamUnavailable
from ..montecarlo.goal import GoalSimulationInput
from ..montecarlo.results import SimulationOutcome
from ..risk.engine import RiskReport
from ..risk.rebalancing import RebalancingReport
from . import prompts
from .config import AdvisorConfig

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_MISSING_CREDENTIALS = "missing_credentials"
STATUS_UNAVAILABLE = "unavailable"

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


@dataclass(frozen=True)
class Narrative:
    """Commentary payload plus how it was produced."""

    payload: Dict[str, Any]
    status: str
    model_used: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.status != STATUS_OK


def parse_json_object(raw_text: str) -> Dict[str, Any]:
    """Parse a model reply into a JSON object, tolerating markdown fences."""
    text = _FENCE_RE.sub("", (raw_text or "").strip()).strip()
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UpstreamUnavailable(f"model reply is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise UpstreamUnavailable("model reply is not a JSON object")
    return payload


class GeminiNarrator:
    """Generates goal and portfolio commentary through the Gemini API."""

    def __init__(self, config: AdvisorConfig, client: Any = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.client = client
        self._sleep = sleep
        if self.client is None and config.gemini_api_key:
            self.client = genai.Client(
                api_key=config.gemini_api_key,
                http_options=types.HttpOptions(timeout=config.gemini_timeout_ms),
            )

    @property
    def configured(self) -> bool:
        return self.client is not None

    def narrate_goal(self, goal: GoalSimulationInput, outcome: SimulationOutcome) -> Narrative:
        return self._narrate(
            prompts.goal_prompt(goal, outcome),
            system_instruction="You are a senior wealth manager. Reply with one JSON object only.",
            placeholder=prompts.goal_placeholder,
        )

    def narrate_risk(self, report: RiskReport) -> Narrative:
        return self._narrate(
            prompts.risk_prompt(report),
            system_instruction="You are a chief risk officer. Reply with one JSON object only.",
            placeholder=prompts.risk_placeholder,
        )

    def narrate_rebalancing(self, report: RebalancingReport) -> Narrative:
        return self._narrate(
            prompts.rebalancing_prompt(report),
            system_instruction="You are a chief risk officer. Reply with one JSON object only.",
            placeholder=prompts.rebalancing_placeholder,
        )

    def _narrate(self,
                 prompt: str,
                 system_instruction: str,
                 placeholder: Callable[[bool], Dict[str, Any]]) -> Narrative:
        if not self.configured:
            return Narrative(placeholder(True), STATUS_MISSING_CREDENTIALS)
        try:
            raw_text, model_used = self._generate_with_fallback(prompt, system_instruction)
            payload = parse_json_object(raw_text)
        except UpstreamUnavailable as exc:
            logger.warning("Narrative generation unavailable, using placeholder: %s", exc)
            return Narrative(placeholder(False), STATUS_UNAVAILABLE)
        return Narrative(payload, STATUS_OK, model_used)

    def _model_candidates(self) -> List[str]:
        candidates: List[str] = []
        for candidate in [self.config.gemini_model, *self.config.fallback_models]:
            model_name = str(candidate or "").strip()
            if model_name and model_name not in candidates:
                candidates.append(model_name)
        return candidates

    def _generate_with_fallback(self, prompt: str, system_instruction: str) -> Tuple[str, str]:
        """Generate a reply, retrying once on rate limits and falling back on 404s."""
        model_candidates = self._model_candidates()
        if not model_candidates:
            raise UpstreamUnavailable("no Gemini model configured")

        contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]
        generation_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.config.temperature,
            response_mime_type="application/json",
        )
        last_error: Optional[Exception] = None

        for model_name in model_candidates:
            retried = False
            while True:
                try:
                    response = self.client.models.generate_content(
                        model=model_name,
                        contents=contents,
                        config=generation_config,
                    )
                except Exception as exc:  # pylint: disable=broad-except
                    last_error = exc
                    message = str(exc)
                    if ("429" in message or "RESOURCE_EXHAUSTED" in message) and not retried:
                        retried = True
                        self._sleep(self.config.rate_limit_retry_seconds)
                        continue
                    break

                raw_text = (getattr(response, "text", None) or "").strip()
                if not raw_text:
                    raise UpstreamUnavailable(f"{model_name} returned an empty reply")
                return raw_text, model_name

            # Only an unavailable model moves on to the next candidate.
            message = str(last_error)
            if "404" not in message and "NOT_FOUND" not in message:
                break

        raise UpstreamUnavailable(f"Gemini generation failed: {last_error}")
