# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Goal simulation outcome and percentile helpers.

Percentiles are nearest-rank reads into the sorted array of final balances,
so the optimistic, median and pessimistic scenarios are always ordered.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np
import pandas as pd

# Scenario name -> percentile level
SCENARIO_PERCENTILES = {
    "optimistic": 0.90,
    "median": 0.50,
    "pessimistic": 0.10,
}


def nearest_rank(sorted_values: Sequence[float], pct: float) -> float:
    """Value at index floor(pct * n) of an ascending array, capped at n - 1."""
    n = len(sorted_values)
    if n == 0:
        raise ValueError("nearest_rank needs at least one value")
    idx = min(int(math.floor(n * pct)), n - 1)
    return float(sorted_values[idx])


def scenario_percentiles(final_balances: np.ndarray) -> Dict[str, float]:
    """Optimistic/median/pessimistic scenarios from unsorted final balances."""
    ordered = np.sort(np.asarray(final_balances, dtype=float))
    return {name: nearest_rank(ordered, pct) for name, pct in SCENARIO_PERCENTILES.items()}


@dataclass(frozen=True)
class SimulationOutcome:
    """Result of projecting one savings goal.

    Attributes:
        success_probability: Percent of paths ending at or above target (0-100)
        optimistic_scenario: 90th percentile final balance
        median_scenario: 50th percentile final balance
        pessimistic_scenario: 10th percentile final balance
        chart_trajectory: Yearly balances of simulated path 0, starting with
            the current amount. This is one sample path for visualisation,
            not an average or a median path.
        required_monthly_contribution: Annuity payment that reaches the target
            at the mean return
        inflation_adjusted_target: Target amount in future money
        gap: target_amount - median_scenario (negative means surplus)
        years: Horizon used, after clamping
        num_simulations: Number of simulated paths
    """
    success_probability: float
    optimistic_scenario: float
    median_scenario: float
    pessimistic_scenario: float
    chart_trajectory: Tuple[float, ...]
    required_monthly_contribution: float
    inflation_adjusted_target: float
    gap: float
    years: float
    num_simulations: int

    def chart_frame(self) -> pd.DataFrame:
        """Chart trajectory as a DataFrame with 'year' and 'balance' columns."""
        return pd.DataFrame({
            "year": list(range(len(self.chart_trajectory))),
            "balance": list(self.chart_trajectory),
        })

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["chart_trajectory"] = list(self.chart_trajectory)
        return data

    def __repr__(self) -> str:
        return (f"SimulationOutcome(success_probability={self.success_probability:.1f}, "
                f"median_scenario={self.median_scenario:.2f}, years={self.years:.2f})")
