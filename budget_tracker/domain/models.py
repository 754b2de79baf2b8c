"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from budget_tracker.domain.exceptions import InvalidTransactionDataError


class Direction(str, Enum):
    """Money flow of a record (transfers are not modeled)"""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class OriginKind(str, Enum):
    """Provenance of a record; does not affect analytics"""

    MANUAL = "MANUAL"
    EXTRACTED = "EXTRACTED"


class InsightKind(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    POSITIVE = "POSITIVE"


@dataclass
class TransactionRecord:
    """Single income/expense entry, persisted by the transaction store"""

    amount: Decimal
    direction: Direction
    category: str
    timestamp: datetime  # naive local wall-clock time
    merchant: Optional[str] = None
    origin: OriginKind = OriginKind.MANUAL
    account_name: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        try:
            self.amount = Decimal(self.amount)
            self.direction = Direction(self.direction)
            self.origin = OriginKind(self.origin)
        except (ArithmeticError, ValueError, TypeError) as e:
            raise InvalidTransactionDataError(f"Malformed transaction record: {e}") from e

        if not self.amount.is_finite() or self.amount <= 0:
            raise InvalidTransactionDataError(f"Amount must be positive, got {self.amount}")
        if not self.category or not self.category.strip():
            raise InvalidTransactionDataError("Category must not be empty")


@dataclass
class ExtractedTransaction:
    """Result of parsing a bank notification"""

    amount: Decimal
    direction: Direction
    category: str
    merchant: Optional[str]
    timestamp: datetime

    def to_record(self, account_name: Optional[str] = None) -> TransactionRecord:
        return TransactionRecord(
            amount=self.amount,
            direction=self.direction,
            category=self.category,
            timestamp=self.timestamp,
            merchant=self.merchant,
            origin=OriginKind.EXTRACTED,
            account_name=account_name,
        )


@dataclass
class MonthlySummary:
    """Income and expense totals for one calendar month"""

    year: int
    month: int
    label: str
    income: Decimal
    expense: Decimal


@dataclass
class DailySummary:
    """Totals for a single local calendar day"""

    day: datetime  # start of day
    spent: Decimal
    earned: Decimal


@dataclass
class Insight:
    """Short advisory observation shown to the user"""

    title: str
    value: str
    kind: InsightKind


@dataclass
class HealthMetrics:
    """Output of the budget health assessment"""

    score: int
    savings_ratio: float
    growth_rate: float
    projected_spend: Decimal
    status: str
