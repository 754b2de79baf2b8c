"""Integration tests for the SQLAlchemy transaction store"""

import pytest
from datetime import datetime
from decimal import Decimal
from budget_tracker.domain.exceptions import RecordNotFoundError
from budget_tracker.domain.models import Direction, OriginKind
from budget_tracker.infrastructure.database.repositories import TransactionRepository


def test_append_assigns_id_and_round_trips(db, make_record):
    repo = TransactionRepository(db)

    stored = repo.append(make_record("1500.25", category="Shopping", merchant="Amazon Pay", origin=OriginKind.EXTRACTED))
    db.commit()

    assert stored.id is not None
    fetched = repo.get(stored.id)
    assert fetched.amount == Decimal("1500.25")
    assert fetched.direction == Direction.EXPENSE
    assert fetched.merchant == "Amazon Pay"
    assert fetched.origin == OriginKind.EXTRACTED


def test_list_all_newest_first_and_by_direction(db, make_record):
    repo = TransactionRepository(db)
    repo.append(make_record("10", timestamp=datetime(2025, 3, 1)))
    repo.append(make_record("20", Direction.INCOME, "Salary", datetime(2025, 3, 10)))
    repo.append(make_record("30", timestamp=datetime(2025, 3, 5)))
    db.commit()

    assert [r.amount for r in repo.list_all()] == [Decimal("20"), Decimal("30"), Decimal("10")]
    assert [r.amount for r in repo.list_by_direction(Direction.EXPENSE)] == [Decimal("30"), Decimal("10")]
    assert [r.category for r in repo.list_by_direction(Direction.INCOME)] == ["Salary"]


def test_update_overwrites_fields(db, make_record):
    repo = TransactionRepository(db)
    stored = repo.append(make_record("10", category="General"))
    db.commit()

    stored.category = "Food"
    stored.amount = Decimal("12.50")
    repo.update(stored)
    db.commit()

    fetched = repo.get(stored.id)
    assert fetched.category == "Food"
    assert fetched.amount == Decimal("12.50")


def test_update_and_delete_missing_record(db, make_record):
    repo = TransactionRepository(db)
    record = make_record("10")
    record.id = 404

    with pytest.raises(RecordNotFoundError):
        repo.update(record)
    with pytest.raises(RecordNotFoundError):
        repo.delete(404)


def test_delete_removes_record(db, make_record):
    repo = TransactionRepository(db)
    stored = repo.append(make_record("10"))
    db.commit()

    repo.delete(stored.id)
    db.commit()

    assert repo.get(stored.id) is None
    assert repo.list_all() == []
