"""POST /v1/extract - Parse a bank notification into a transaction"""

import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from budget_tracker.api.v1.schemas import ExtractionRequest, ExtractionResponse, TransactionSchema
from budget_tracker.api.dependencies import Clock, get_clock, get_extractor, get_request_id
from budget_tracker.config import settings
from budget_tracker.domain.extraction import NotificationExtractor
from budget_tracker.infrastructure.database.session import get_db
from budget_tracker.infrastructure.database.repositories import TransactionRepository
from budget_tracker.infrastructure.observability.logging import log_extraction
from budget_tracker.infrastructure.observability.metrics import record_extraction

router = APIRouter()


@router.post("/extract", response_model=ExtractionResponse)
def extract_notification(
    request_body: ExtractionRequest,
    request: Request,
    db: Session = Depends(get_db),
    extractor: NotificationExtractor = Depends(get_extractor),
    clock: Clock = Depends(get_clock),
):
    """
    Detect a transaction in raw notification text.

    Flow:
    1. Extract amount, direction, merchant and category
    2. Optionally append the record to the store
    3. Record metrics and a structured log line

    Text without a currency-marked amount is not an error: the response
    reports detected=false.
    """
    request_id = get_request_id(request)
    extracted = extractor.extract(request_body.text, now=clock())

    if extracted is None:
        record_extraction(False)
        log_extraction(request_id, detected=False)
        return ExtractionResponse(detected=False)

    record = extracted.to_record(account_name=settings.default_account_name)

    if request_body.save:
        try:
            record = TransactionRepository(db).append(record)
            db.commit()
        except Exception as e:
            db.rollback()
            logging.error(f"Failed to store extracted transaction: {e}", extra={"request_id": request_id})
            raise

    record_extraction(True, record.category)
    log_extraction(
        request_id,
        detected=True,
        direction=record.direction.value,
        category=record.category,
        saved=request_body.save,
    )

    return ExtractionResponse(detected=True, transaction=TransactionSchema(**asdict(record)))
