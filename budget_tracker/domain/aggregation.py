"""Month and day bucketing of transaction records"""

from collections import OrderedDict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from budget_tracker.config import settings
from budget_tracker.domain.models import DailySummary, Direction, MonthlySummary, TransactionRecord
from budget_tracker.utils.date_utils import month_label, shift_month, start_of_day

ZERO = Decimal("0")


def month_key(moment: datetime) -> Tuple[int, int]:
    return moment.year, moment.month


def sum_amounts(records: Iterable[TransactionRecord], direction: Direction) -> Decimal:
    return sum((r.amount for r in records if r.direction == direction), ZERO)


def totals_by_direction(records: Sequence[TransactionRecord]) -> Tuple[Decimal, Decimal]:
    """Lifetime (income, expense) sums over every record"""
    return sum_amounts(records, Direction.INCOME), sum_amounts(records, Direction.EXPENSE)


def records_in_month(records: Iterable[TransactionRecord], year: int, month: int) -> List[TransactionRecord]:
    return [r for r in records if month_key(r.timestamp) == (year, month)]


def month_totals(records: Sequence[TransactionRecord], year: int, month: int) -> Tuple[Decimal, Decimal]:
    """(income, expense) for one calendar month"""
    return totals_by_direction(records_in_month(records, year, month))


def monthly_summary(
    records: Sequence[TransactionRecord],
    now: datetime,
    months: int | None = None,
) -> List[MonthlySummary]:
    """
    Income/expense per month for the N months ending at now's month.

    Oldest month first. Months without records are still emitted with zero
    totals so the timeline has no gaps; records older than the window are
    ignored here.
    """
    months = settings.analytics_window_months if months is None else months
    if months < 1:
        raise ValueError(f"months must be at least 1, got {months}")

    buckets: "OrderedDict[Tuple[int, int], List[Decimal]]" = OrderedDict()
    for offset in range(-(months - 1), 1):
        buckets[shift_month(now.year, now.month, offset)] = [ZERO, ZERO]

    for record in records:
        bucket = buckets.get(month_key(record.timestamp))
        if bucket is None:
            continue
        if record.direction == Direction.INCOME:
            bucket[0] += record.amount
        else:
            bucket[1] += record.amount

    return [
        MonthlySummary(year=year, month=month, label=month_label(month), income=income, expense=expense)
        for (year, month), (income, expense) in buckets.items()
    ]


def records_for_day(records: Iterable[TransactionRecord], now: datetime) -> List[TransactionRecord]:
    """Records in [start_of_day(now), start_of_day(now) + 24h)"""
    day_start = start_of_day(now)
    day_end = day_start + timedelta(days=1)
    return [r for r in records if day_start <= r.timestamp < day_end]


def daily_summary(records: Sequence[TransactionRecord], now: datetime) -> DailySummary:
    """Today spent / earned"""
    today = records_for_day(records, now)
    earned, spent = totals_by_direction(today)
    return DailySummary(day=start_of_day(now), spent=spent, earned=earned)


def group_by_day(records: Iterable[TransactionRecord]) -> List[Tuple[datetime, List[TransactionRecord]]]:
    """Newest day first, newest record first within each day"""
    groups: "OrderedDict[datetime, List[TransactionRecord]]" = OrderedDict()
    for record in sorted(records, key=lambda r: r.timestamp, reverse=True):
        groups.setdefault(start_of_day(record.timestamp), []).append(record)
    return list(groups.items())


def filter_records(
    records: Iterable[TransactionRecord],
    direction: Optional[Direction] = None,
    category: Optional[str] = None,
    search: str = "",
) -> List[TransactionRecord]:
    """
    Filter by direction, exact category, and a case-insensitive search term.

    The search term is matched against category and merchant.
    """
    term = (search or "").strip().lower()

    def matches(record: TransactionRecord) -> bool:
        if direction is not None and record.direction != direction:
            return False
        if category is not None and record.category != category:
            return False
        if term:
            haystack = f"{record.category} {record.merchant or ''}".lower()
            return term in haystack
        return True

    return [r for r in records if matches(r)]
