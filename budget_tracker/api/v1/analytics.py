"""Analytics endpoints - monthly trend, smart insights and budget health"""

from dataclasses import asdict
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_tracker.api.v1.schemas import (
    BudgetHealthResponse,
    InsightSchema,
    InsightsResponse,
    MonthlyAnalyticsResponse,
    MonthlySummarySchema,
)
from budget_tracker.api.dependencies import Clock, get_clock
from budget_tracker.config import settings
from budget_tracker.domain.aggregation import monthly_summary
from budget_tracker.domain.health import compute_budget_health
from budget_tracker.domain.insights import calculate_insights
from budget_tracker.infrastructure.database.session import get_db
from budget_tracker.infrastructure.database.repositories import TransactionRepository
from budget_tracker.infrastructure.observability.metrics import record_health_status

router = APIRouter()


@router.get("/analytics/monthly", response_model=MonthlyAnalyticsResponse)
def get_monthly_analytics(
    months: int = Query(settings.analytics_window_months, ge=1, le=36),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Income vs. expense for the last N months, oldest first, gaps filled with zeros"""
    summaries = monthly_summary(TransactionRepository(db).list_all(), clock(), months=months)
    return MonthlyAnalyticsResponse(months=[MonthlySummarySchema(**asdict(s)) for s in summaries])


@router.get("/insights", response_model=InsightsResponse)
def get_insights(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    insights = calculate_insights(TransactionRepository(db).list_all(), clock())
    return InsightsResponse(insights=[InsightSchema(**asdict(i)) for i in insights])


@router.get("/budget-health", response_model=BudgetHealthResponse)
def get_budget_health(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    """
    Health score, savings ratio, expense growth and projected month-end spend.

    Recomputed from the full record set on every call.
    """
    metrics = compute_budget_health(TransactionRepository(db).list_all(), clock())
    record_health_status(metrics.status)
    return BudgetHealthResponse(**asdict(metrics))
