"""Smart insights derived from the current month's spending"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence

from budget_tracker.config import settings
from budget_tracker.domain.aggregation import month_totals, records_in_month
from budget_tracker.domain.models import Direction, Insight, InsightKind, TransactionRecord
from budget_tracker.utils.date_utils import previous_month

MAX_INSIGHTS = 3

WELCOME_INSIGHT = Insight("Welcome", "Add transactions to see smart insights", InsightKind.INFO)


def top_category_insight(expenses: Sequence[TransactionRecord], symbol: str) -> Optional[Insight]:
    """Category with the largest total spend; first encountered wins ties"""
    totals: Dict[str, Decimal] = {}
    for record in expenses:
        totals[record.category] = totals.get(record.category, Decimal("0")) + record.amount

    if not totals:
        return None

    category = max(totals, key=totals.get)
    whole = totals[category].quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return Insight("Top Category", f"{category} • {symbol}{whole}", InsightKind.INFO)


def month_comparison_insight(current_expense: Decimal, previous_expense: Decimal) -> Optional[Insight]:
    """
    Month-over-month expense change.

    Skipped when there was no spending last month (percentage undefined)
    or when spending is unchanged. The percentage is truncated toward zero.
    """
    if previous_expense <= 0:
        return None

    change = (current_expense - previous_expense) / previous_expense * 100
    if change > 0:
        return Insight("Month Comparison", f"Spending increased by {int(change)}%", InsightKind.WARNING)
    if change < 0:
        return Insight("Month Comparison", f"Spending reduced by {int(-change)}%", InsightKind.POSITIVE)
    return None


def largest_expense_insight(expenses: Sequence[TransactionRecord], symbol: str) -> Optional[Insight]:
    if not expenses:
        return None
    largest = max(expenses, key=lambda r: r.amount)
    return Insight("Largest Expense", f"{largest.category} • {symbol}{largest.amount}", InsightKind.INFO)


def calculate_insights(
    records: Sequence[TransactionRecord],
    now: datetime,
    currency_symbol: str | None = None,
) -> List[Insight]:
    """
    Main entry point: up to three insights for the month containing `now`.

    Order: top category, month comparison, largest expense.
    """
    if not records:
        return [WELCOME_INSIGHT]

    symbol = settings.currency_symbol if currency_symbol is None else currency_symbol

    this_month = records_in_month(records, now.year, now.month)
    expenses = [r for r in this_month if r.direction == Direction.EXPENSE]

    prev_year, prev_month = previous_month(now.year, now.month)
    _, previous_expense = month_totals(records, prev_year, prev_month)
    current_expense = sum((r.amount for r in expenses), Decimal("0"))

    candidates = [
        top_category_insight(expenses, symbol),
        month_comparison_insight(current_expense, previous_expense),
        largest_expense_insight(expenses, symbol),
    ]

    return [insight for insight in candidates if insight is not None][:MAX_INSIGHTS]
