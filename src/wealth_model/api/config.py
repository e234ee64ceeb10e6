"""Service configuration loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..advisor.config import AdvisorConfig
from ..market.price_feed import PriceFeedConfig


def load_env_files() -> None:
    """Load .env files without overriding variables already in the process.

    Priority: 1) process environment (container env, CI secrets)
              2) .env in the working directory (local development)
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


def _optional_int(raw: str) -> Optional[int]:
    raw = (raw or "").strip()
    return int(raw) if raw else None


def _flag(raw: str) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ServiceConfig:
    """Runtime configuration for the analytics API."""

    host: str = "0.0.0.0"
    port: int = 8002
    num_simulations: int = 1000
    simulation_seed: Optional[int] = None
    use_live_prices: bool = False
    advisor: AdvisorConfig = field(default_factory=AdvisorConfig)
    price_feed: PriceFeedConfig = field(default_factory=PriceFeedConfig)

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build configuration from environment variables (and .env)."""
        load_env_files()
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8002")),
            num_simulations=int(os.getenv("NUM_SIMULATIONS", "1000")),
            simulation_seed=_optional_int(os.getenv("SIMULATION_SEED", "")),
            use_live_prices=_flag(os.getenv("USE_LIVE_PRICES", "")),
            advisor=AdvisorConfig.from_env(),
            price_feed=PriceFeedConfig.from_env(),
        )
