# src/core/mortgage.py
from __future__ import annotations

import math
from typing import List, Tuple


def monthly_payment(principal: float, annual_rate: float, term_years: float) -> float:
    """
    Fixed monthly principal + interest payment for a fully amortising loan.

    Returns 0.0 for a non-positive principal or term. A zero rate falls back
    to straight-line repayment.
    """
    if principal <= 0 or term_years <= 0:
        return 0.0

    monthly_rate = annual_rate / 12.0
    n_payments = term_years * 12
    if monthly_rate == 0:
        return principal / n_payments
    return principal * monthly_rate / (1.0 - (1.0 + monthly_rate) ** (-n_payments))


def amortize_by_year(
    principal: float,
    monthly_rate: float,
    payment: float,
    total_months: int,
) -> Tuple[List[float], List[float]]:
    """
    Simulate the loan month by month and return yearly snapshots.

    Returns (balance_by_year, interest_by_year): the balance at the end of
    each loan year and the interest paid during it. A trailing partial year
    is snapshotted with the last known balance, so both lists have
    ceil(total_months / 12) entries.
    """
    total_months = max(0, int(total_months))
    balance = max(0.0, principal)

    balance_by_year: List[float] = []
    interest_by_year: List[float] = []
    interest_acc = 0.0

    for month in range(1, total_months + 1):
        interest = balance * monthly_rate
        balance = max(0.0, balance + interest - payment)
        interest_acc += interest
        if month % 12 == 0:
            balance_by_year.append(balance)
            interest_by_year.append(interest_acc)
            interest_acc = 0.0

    n_years = math.ceil(total_months / 12)
    if len(balance_by_year) < n_years:
        balance_by_year.append(balance)
        interest_by_year.append(interest_acc)

    return balance_by_year, interest_by_year
