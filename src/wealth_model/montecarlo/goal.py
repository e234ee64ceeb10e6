# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Savings goal input record and horizon calculation."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..errors import InvalidInput
from ..parsing import pick_first, to_date, to_float, to_text

DAYS_PER_YEAR = 365.0
MIN_HORIZON_YEARS = 1.0
MAX_HORIZON_YEARS = 100.0


@dataclass(frozen=True)
class GoalSimulationInput:
    """A single savings goal to project.

    Attributes:
        title: Display name of the goal
        target_amount: Amount to reach, strictly positive
        current_amount: Amount already saved
        monthly_contribution: Level contribution added at the end of each month
        target_date: Date the goal is due
        goal_type: Category tag; does not change the simulation
    """
    title: str
    target_amount: float
    current_amount: float
    monthly_contribution: float
    target_date: date
    goal_type: str = "general"

    def __post_init__(self):
        for name in ("target_amount", "current_amount", "monthly_contribution"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidInput(f"{name} must be a finite number")
        if not self.target_amount > 0:
            raise InvalidInput(f"target_amount must be positive, got {self.target_amount}")
        if self.current_amount < 0:
            raise InvalidInput(f"current_amount cannot be negative, got {self.current_amount}")
        if self.monthly_contribution < 0:
            raise InvalidInput(
                f"monthly_contribution cannot be negative, got {self.monthly_contribution}"
            )
        if not isinstance(self.target_date, date):
            raise InvalidInput("target_date must be a date")

    def horizon_years(self, today: Optional[date] = None) -> float:
        """Years until target_date, clamped to at least one year.

        Goals that are overdue or due within a year are projected over a
        one-year horizon instead of being rejected.

        Raises:
            InvalidInput: If the goal is more than MAX_HORIZON_YEARS away
        """
        today = today or date.today()
        years = (self.target_date - today).days / DAYS_PER_YEAR
        if years > MAX_HORIZON_YEARS:
            raise InvalidInput(
                f"target_date is more than {MAX_HORIZON_YEARS:.0f} years away: {self.target_date}"
            )
        return max(MIN_HORIZON_YEARS, years)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'GoalSimulationInput':
        """Build a goal from a request body (snake_case or camelCase keys).

        Raises:
            InvalidInput: If a required field is missing or malformed
        """
        if not isinstance(payload, dict):
            raise InvalidInput("goal payload must be an object")
        return cls(
            title=to_text(pick_first(payload, [["title"], ["goal_title"], ["goalTitle"]]), "Goal"),
            target_amount=to_float(
                pick_first(payload, [["target_amount"], ["targetAmount"]]), "target_amount"
            ),
            current_amount=to_float(
                pick_first(payload, [["current_amount"], ["currentAmount"]]),
                "current_amount",
                default=0.0,
            ),
            monthly_contribution=to_float(
                pick_first(payload, [["monthly_contribution"], ["monthlyContribution"]]),
                "monthly_contribution",
                default=0.0,
            ),
            target_date=to_date(
                pick_first(payload, [["target_date"], ["targetDate"]]), "target_date"
            ),
            goal_type=to_text(pick_first(payload, [["goal_type"], ["goalType"]]), "general"),
        )
