"""Budget health engine - savings, growth and month-end projection scoring"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from budget_tracker.domain.aggregation import month_totals
from budget_tracker.domain.models import HealthMetrics, TransactionRecord
from budget_tracker.utils.date_utils import days_in_month, previous_month

ZERO = Decimal("0")
CENT = Decimal("0.01")


def calculate_savings_ratio(income: Decimal, expense: Decimal) -> float:
    """Share of income not spent, clamped to [0, 1]; 0 without income"""
    if income <= 0:
        return 0.0
    ratio = float((income - expense) / income)
    return min(max(ratio, 0.0), 1.0)


def calculate_growth_rate(expense: Decimal, previous_expense: Decimal) -> float:
    """Signed relative change in expense vs. last month, unclamped"""
    if previous_expense <= 0:
        return 0.0
    return float((expense - previous_expense) / previous_expense)


def project_month_spend(expense: Decimal, day_of_month: int, month_length: int) -> Decimal:
    """Extrapolate the daily average spend so far to the whole month"""
    daily_average = expense / day_of_month if day_of_month > 0 else ZERO
    return (daily_average * month_length).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_health_score(
    savings_ratio: float,
    growth_rate: float,
    income: Decimal,
    expense: Decimal,
) -> int:
    """
    Composite health score from 0 (critical) to 100 (excellent).

    - Base: 50
    - Savings: up to +40 (savings_ratio * 40, rounded half up)
    - Shrinking spend vs. last month: +10
    - Spending more than earned (with some income): -30
    """
    score = 50
    score += int(Decimal(str(savings_ratio * 40)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if growth_rate < 0:
        score += 10
    if income > 0 and expense > income:
        score -= 30
    return min(max(score, 0), 100)


def determine_health_status(score: int) -> str:
    """
    Map score to status band.

    - 81+:   Excellent
    - 61-80: Good
    - 41-60: Risk
    - 0-40:  Critical
    """
    if score > 80:
        return "Excellent"
    elif score > 60:
        return "Good"
    elif score > 40:
        return "Risk"
    else:
        return "Critical"


def compute_budget_health(records: Sequence[TransactionRecord], now: datetime) -> HealthMetrics:
    """
    Main entry point: budget health for the month containing `now`.

    Returns the "No Data" metrics when there are no records at all.
    """
    if not records:
        return HealthMetrics(score=0, savings_ratio=0.0, growth_rate=0.0, projected_spend=ZERO, status="No Data")

    income, expense = month_totals(records, now.year, now.month)
    prev_year, prev_month = previous_month(now.year, now.month)
    _, previous_expense = month_totals(records, prev_year, prev_month)

    savings_ratio = calculate_savings_ratio(income, expense)
    growth_rate = calculate_growth_rate(expense, previous_expense)
    projected_spend = project_month_spend(expense, now.day, days_in_month(now.year, now.month))
    score = calculate_health_score(savings_ratio, growth_rate, income, expense)

    return HealthMetrics(
        score=score,
        savings_ratio=savings_ratio,
        growth_rate=growth_rate,
        projected_spend=projected_spend,
        status=determine_health_status(score),
    )
