"""Runtime configuration for the narrative advisor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class AdvisorConfig:
    """Runtime configuration for the Gemini narrator."""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    fallback_models: List[str] = field(default_factory=list)

    gemini_timeout_ms: int = 30000
    temperature: float = 0.2
    rate_limit_retry_seconds: float = 4.0

    @classmethod
    def from_env(cls) -> "AdvisorConfig":
        """Build configuration from environment variables."""
        fallback_raw = os.getenv("ADVISOR_GEMINI_FALLBACK_MODELS", "")
        fallback_models = [m.strip() for m in fallback_raw.split(",") if m.strip()]

        gemini_key = (
            os.getenv("GEMINI_API_KEY", "").strip()
            or os.getenv("GOOGLE_GENAI_API_KEY", "").strip()
        )
        return cls(
            gemini_api_key=gemini_key,
            gemini_model=os.getenv("ADVISOR_GEMINI_MODEL", "gemini-2.5-flash").strip(),
            fallback_models=fallback_models,
            gemini_timeout_ms=int(os.getenv("ADVISOR_GEMINI_TIMEOUT_MS", "30000")),
            temperature=float(os.getenv("ADVISOR_GEMINI_TEMPERATURE", "0.2")),
            rate_limit_retry_seconds=float(os.getenv("ADVISOR_RATE_LIMIT_RETRY_SECONDS", "4")),
        )
