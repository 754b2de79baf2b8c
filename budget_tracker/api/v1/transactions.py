"""Transaction store endpoints - manual entry, listing, update and delete"""

import logging
from dataclasses import asdict
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from budget_tracker.api.v1.schemas import (
    DailySummarySchema,
    DayGroupSchema,
    ManualTransactionRequest,
    TransactionSchema,
    TransactionUpdateRequest,
)
from budget_tracker.api.dependencies import Clock, get_clock, get_request_id
from budget_tracker.domain.aggregation import daily_summary, filter_records, group_by_day, totals_by_direction
from budget_tracker.domain.exceptions import InvalidTransactionDataError, RecordNotFoundError
from budget_tracker.domain.extraction import parse_manual_entry
from budget_tracker.domain.models import Direction, TransactionRecord
from budget_tracker.infrastructure.database.session import get_db
from budget_tracker.infrastructure.database.repositories import TransactionRepository
from budget_tracker.utils.date_utils import format_header_date

router = APIRouter()


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
def create_transaction(
    request_body: ManualTransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Add a manually entered transaction"""
    record = parse_manual_entry(
        request_body.amount,
        request_body.direction,
        request_body.category,
        merchant=request_body.merchant,
        account_name=request_body.account_name,
        now=clock(),
    )
    if record is None:
        logging.warning("Rejected manual transaction", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail="Amount must be a positive number and category must not be empty")

    stored = TransactionRepository(db).append(record)
    db.commit()
    return TransactionSchema(**asdict(stored))


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(
    direction: Optional[Direction] = Query(None, description="INCOME or EXPENSE"),
    category: Optional[str] = Query(None, description="Exact category label"),
    search: str = Query("", description="Case-insensitive match on category or merchant"),
    db: Session = Depends(get_db),
):
    """List records newest first, optionally filtered"""
    repo = TransactionRepository(db)
    records = repo.list_by_direction(direction) if direction is not None else repo.list_all()
    return [TransactionSchema(**asdict(r)) for r in filter_records(records, category=category, search=search)]


@router.get("/transactions/by-day", response_model=List[DayGroupSchema])
def list_transactions_by_day(
    direction: Optional[Direction] = Query(None, description="INCOME or EXPENSE"),
    category: Optional[str] = Query(None, description="Exact category label"),
    search: str = Query("", description="Case-insensitive match on category or merchant"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Records grouped per local day, newest day first, with per-day totals"""
    now = clock()
    records = filter_records(TransactionRepository(db).list_all(), direction=direction, category=category, search=search)

    groups = []
    for day, day_records in group_by_day(records):
        earned, spent = totals_by_direction(day_records)
        groups.append(
            DayGroupSchema(
                day=day,
                header=format_header_date(day, now),
                spent=spent,
                earned=earned,
                transactions=[TransactionSchema(**asdict(r)) for r in day_records],
            )
        )
    return groups


@router.get("/transactions/today", response_model=DailySummarySchema)
def get_today_summary(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    """Total spent and earned since local midnight"""
    summary = daily_summary(TransactionRepository(db).list_all(), clock())
    return DailySummarySchema(**asdict(summary))


@router.put("/transactions/{transaction_id}", response_model=TransactionSchema)
def update_transaction(
    transaction_id: int,
    request_body: TransactionUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Overwrite an existing record; timestamp and origin are kept unless given"""
    repo = TransactionRepository(db)
    existing = repo.get(transaction_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Transaction not found")

    try:
        updated = repo.update(
            TransactionRecord(
                id=transaction_id,
                amount=request_body.amount,
                direction=request_body.direction,
                category=request_body.category.strip(),
                merchant=request_body.merchant,
                account_name=request_body.account_name,
                origin=existing.origin,
                timestamp=request_body.timestamp or existing.timestamp,
            )
        )
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Update failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidTransactionDataError as e:
        db.rollback()
        logging.warning(f"Rejected transaction update: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return TransactionSchema(**asdict(updated))


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: int, request: Request, db: Session = Depends(get_db)):
    try:
        TransactionRepository(db).delete(transaction_id)
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Delete failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))
