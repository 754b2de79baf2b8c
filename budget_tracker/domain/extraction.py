"""Transaction extraction from bank notification text and manual entries"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Sequence, Union

from budget_tracker.config import settings
from budget_tracker.domain.categories import MerchantCategoryClassifier
from budget_tracker.domain.models import Direction, ExtractedTransaction, OriginKind, TransactionRecord

EXPENSE_KEYWORDS = ("debited", "spent", "paid", "sent", "transaction at")
INCOME_KEYWORDS = ("credited", "received", "added")

NUMERAL_PATTERN = r"([\d,]+\.?\d*)"
MERCHANT_REGEX = re.compile(r"\b(?:at|to|from)\s+([a-zA-Z0-9\s]{3,15})", re.IGNORECASE)

# Matches the store column: Numeric(14, 2)
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999999.99")


def build_amount_regex(currency_markers: Sequence[str]) -> re.Pattern:
    """Currency marker followed by a numeral, e.g. "Rs. 1,500.00", "INR 2000", "₹99"."""
    # Longest first so "rs." wins over "rs"
    markers = sorted({m.lower() for m in currency_markers if m}, key=len, reverse=True)
    alternation = "|".join(re.escape(m) for m in markers)
    return re.compile(rf"(?<![a-z0-9])(?:{alternation})\s*{NUMERAL_PATTERN}", re.IGNORECASE)


def parse_amount(numeral: str) -> Optional[Decimal]:
    """Strip grouping separators and parse to a positive amount in cents, or None"""
    cleaned = numeral.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
        if not amount.is_finite():
            return None
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    if amount <= 0 or amount > MAX_AMOUNT:
        return None
    return amount


def classify_direction(text: str) -> Direction:
    """
    Expense keywords take priority over income keywords.

    Text matching neither set is treated as an expense: a missed expense
    hurts budget tracking more than a spurious one.
    """
    lower = text.lower()
    if any(keyword in lower for keyword in EXPENSE_KEYWORDS):
        return Direction.EXPENSE
    if any(keyword in lower for keyword in INCOME_KEYWORDS):
        return Direction.INCOME
    return Direction.EXPENSE


def extract_merchant(text: str) -> Optional[str]:
    match = MERCHANT_REGEX.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


class NotificationExtractor:
    """Parses SMS/email notification text into a structured transaction"""

    def __init__(
        self,
        currency_markers: Sequence[str] | None = None,
        classifier: MerchantCategoryClassifier | None = None,
    ):
        self.amount_regex = build_amount_regex(currency_markers or settings.currency_markers)
        self.classifier = classifier or MerchantCategoryClassifier()

    def extract(self, raw_text: Optional[str], now: datetime | None = None) -> Optional[ExtractedTransaction]:
        """
        Extract amount, direction, merchant and category from notification text.

        Steps:
        1. Blank text → None
        2. First currency-marked numeral is the amount; missing or invalid → None
        3. Direction from expense/income keywords (default EXPENSE)
        4. Merchant from the first "at/to/from <name>" phrase, optional
        5. Category inferred from the merchant

        The record is timestamped at parse time, not from the message content.
        Returns None instead of raising when nothing can be detected.
        """
        if not raw_text or not raw_text.strip():
            return None

        amount_match = self.amount_regex.search(raw_text)
        if not amount_match:
            return None

        amount = parse_amount(amount_match.group(1))
        if amount is None:
            return None

        merchant = extract_merchant(raw_text)

        return ExtractedTransaction(
            amount=amount,
            direction=classify_direction(raw_text),
            category=self.classifier.classify(merchant),
            merchant=merchant,
            timestamp=now or datetime.now(),
        )


def extract_transaction(raw_text: Optional[str], now: datetime | None = None) -> Optional[ExtractedTransaction]:
    return NotificationExtractor().extract(raw_text, now=now)


def parse_manual_entry(
    amount_text: str,
    direction: Union[Direction, str],
    category: str,
    merchant: Optional[str] = None,
    account_name: Optional[str] = None,
    now: datetime | None = None,
) -> Optional[TransactionRecord]:
    """
    Build a MANUAL record from free-form form input.

    Returns None when the amount is not a positive number, the category is
    blank, or the direction is not INCOME/EXPENSE.
    """
    amount = parse_amount(amount_text or "")
    if amount is None or not category or not category.strip():
        return None

    try:
        direction = Direction(direction.upper() if isinstance(direction, str) else direction)
    except ValueError:
        return None

    merchant = merchant.strip() if merchant else None

    return TransactionRecord(
        amount=amount,
        direction=direction,
        category=category.strip(),
        timestamp=now or datetime.now(),
        merchant=merchant or None,
        origin=OriginKind.MANUAL,
        account_name=account_name,
    )
