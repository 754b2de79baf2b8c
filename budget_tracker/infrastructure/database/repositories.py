"""Data access layer for transaction records"""

from typing import List, Optional
from sqlalchemy.orm import Session
from budget_tracker.infrastructure.database.models import TransactionRow
from budget_tracker.domain.models import Direction, OriginKind, TransactionRecord
from budget_tracker.domain.exceptions import RecordNotFoundError


def to_record(row: TransactionRow) -> TransactionRecord:
    return TransactionRecord(
        id=row.id,
        amount=row.amount,
        direction=Direction(row.direction),
        category=row.category,
        merchant=row.merchant,
        account_name=row.account_name,
        origin=OriginKind(row.origin),
        timestamp=row.timestamp,
    )


class TransactionRepository:
    """Keyed record store: append, update, delete, list"""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[TransactionRecord]:
        """All records, newest first"""
        rows = self.db.query(TransactionRow).order_by(TransactionRow.timestamp.desc(), TransactionRow.id.desc()).all()
        return [to_record(row) for row in rows]

    def list_by_direction(self, direction: Direction) -> List[TransactionRecord]:
        rows = (
            self.db.query(TransactionRow)
            .filter(TransactionRow.direction == Direction(direction).value)
            .order_by(TransactionRow.timestamp.desc(), TransactionRow.id.desc())
            .all()
        )
        return [to_record(row) for row in rows]

    def get(self, record_id: int) -> Optional[TransactionRecord]:
        row = self.db.get(TransactionRow, record_id)
        return to_record(row) if row else None

    def append(self, record: TransactionRecord) -> TransactionRecord:
        """Insert a new record and return it with its assigned id"""
        row = TransactionRow(
            amount=record.amount,
            direction=record.direction.value,
            category=record.category,
            merchant=record.merchant,
            account_name=record.account_name,
            origin=record.origin.value,
            timestamp=record.timestamp,
        )
        self.db.add(row)
        self.db.flush()  # Get ID without committing
        return to_record(row)

    def update(self, record: TransactionRecord) -> TransactionRecord:
        """
        Overwrite every field of an existing record.

        Raises:
            RecordNotFoundError: If no record has record.id
        """
        row = self.db.get(TransactionRow, record.id) if record.id is not None else None
        if row is None:
            raise RecordNotFoundError(f"Transaction {record.id} not found")

        row.amount = record.amount
        row.direction = record.direction.value
        row.category = record.category
        row.merchant = record.merchant
        row.account_name = record.account_name
        row.origin = record.origin.value
        row.timestamp = record.timestamp
        self.db.flush()
        return to_record(row)

    def delete(self, record_id: int) -> None:
        row = self.db.get(TransactionRow, record_id)
        if row is None:
            raise RecordNotFoundError(f"Transaction {record_id} not found")
        self.db.delete(row)
        self.db.flush()
