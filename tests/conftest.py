"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from budget_tracker.api.main import create_app
from budget_tracker.api.dependencies import get_clock
from budget_tracker.infrastructure.database.models import Base
from budget_tracker.infrastructure.database.session import get_db
from budget_tracker.domain.models import Direction, OriginKind, TransactionRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Mid-March 2025: 31-day month, February is the previous month
FROZEN_NOW = datetime(2025, 3, 15, 12, 0)


@pytest.fixture
def now() -> datetime:
    return FROZEN_NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FROZEN_NOW)
    return TestClient(app)


@pytest.fixture
def make_record() -> Callable[..., TransactionRecord]:
    """Factory for records with sensible defaults"""

    def _make(
        amount: str | int = "100",
        direction: Direction = Direction.EXPENSE,
        category: str = "General",
        timestamp: datetime = FROZEN_NOW,
        merchant: str | None = None,
        origin: OriginKind = OriginKind.MANUAL,
    ) -> TransactionRecord:
        return TransactionRecord(
            amount=Decimal(str(amount)),
            direction=direction,
            category=category,
            timestamp=timestamp,
            merchant=merchant,
            origin=origin,
        )

    return _make
