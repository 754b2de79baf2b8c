"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from budget_tracker.domain.extraction import MAX_AMOUNT
from budget_tracker.domain.models import Direction, InsightKind, OriginKind


class ExtractionRequest(BaseModel):
    """Request body for POST /v1/extract"""

    text: str = Field(..., description="Raw SMS/email notification text")
    save: bool = Field(False, description="Append the detected transaction to the store")


class TransactionSchema(BaseModel):
    """Stored or extracted transaction"""

    id: Optional[int] = None
    amount: Decimal
    direction: Direction
    category: str
    merchant: Optional[str] = None
    account_name: Optional[str] = None
    origin: OriginKind
    timestamp: datetime


class ExtractionResponse(BaseModel):
    """Response for POST /v1/extract"""

    detected: bool
    transaction: Optional[TransactionSchema] = None


class ManualTransactionRequest(BaseModel):
    """Request body for POST /v1/transactions"""

    amount: str = Field(..., description="Amount as typed, e.g. '1,250.50'")
    direction: str = Field("EXPENSE", description="INCOME or EXPENSE")
    category: str
    merchant: Optional[str] = None
    account_name: Optional[str] = None


class TransactionUpdateRequest(BaseModel):
    """Request body for PUT /v1/transactions/{id}"""

    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, decimal_places=2)
    direction: Direction
    category: str = Field(..., min_length=1)
    merchant: Optional[str] = None
    account_name: Optional[str] = None
    timestamp: Optional[datetime] = None


class DailySummarySchema(BaseModel):
    """Response for GET /v1/transactions/today"""

    day: datetime
    spent: Decimal
    earned: Decimal


class DayGroupSchema(BaseModel):
    """One day of the transaction list, headed Today, Yesterday or the date"""

    day: datetime
    header: str
    spent: Decimal
    earned: Decimal
    transactions: List[TransactionSchema]


class MonthlySummarySchema(BaseModel):
    year: int
    month: int
    label: str
    income: Decimal
    expense: Decimal


class MonthlyAnalyticsResponse(BaseModel):
    """Response for GET /v1/analytics/monthly"""

    months: List[MonthlySummarySchema]


class InsightSchema(BaseModel):
    title: str
    value: str
    kind: InsightKind


class InsightsResponse(BaseModel):
    """Response for GET /v1/insights"""

    insights: List[InsightSchema]


class BudgetHealthResponse(BaseModel):
    """Response for GET /v1/budget-health"""

    score: int
    savings_ratio: float
    growth_rate: float
    projected_spend: Decimal
    status: str
