"""SQLAlchemy ORM models for the transaction store"""

from sqlalchemy import Column, DateTime, Integer, Numeric, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TransactionRow(Base):
    """Persisted income/expense record"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column(Numeric(14, 2), nullable=False)
    direction = Column(Text, nullable=False, index=True)  # INCOME | EXPENSE
    category = Column(Text, nullable=False)
    merchant = Column(Text, nullable=True)
    account_name = Column(Text, nullable=True)
    origin = Column(Text, nullable=False, default="MANUAL")  # MANUAL | EXTRACTED
    timestamp = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
