# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Closed-form savings calculations used alongside the Monte Carlo run."""


def required_monthly_contribution(target_amount: float,
                                  current_amount: float,
                                  years: float,
                                  annual_rate: float) -> float:
    """Level monthly payment that grows current_amount to target_amount.

    Solves the future value of an ordinary annuity for the payment:

        FV = P * (1 + i)^n + PMT * ((1 + i)^n - 1) / i

    with i = annual_rate / 12 and n = years * 12 (fractional months are kept).

    Returns:
        The monthly payment, or 0.0 when the compounded principal already
        meets the target. Never negative.
    """
    months = years * 12.0
    if months <= 0:
        return max(0.0, target_amount - current_amount)
    monthly_rate = annual_rate / 12.0
    growth = (1.0 + monthly_rate) ** months
    shortfall = target_amount - current_amount * growth
    if shortfall <= 0:
        return 0.0
    if monthly_rate == 0:
        return shortfall / months
    return shortfall / ((growth - 1.0) / monthly_rate)


def inflation_adjusted_target(target_amount: float, years: float, inflation_rate: float) -> float:
    """Future cost of target_amount after compounding inflation for years."""
    return target_amount * (1.0 + inflation_rate) ** years
