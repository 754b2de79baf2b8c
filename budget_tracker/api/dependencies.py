"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from typing import Callable
from fastapi import Request
from budget_tracker.domain.extraction import NotificationExtractor

Clock = Callable[[], datetime]


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> Clock:
    """Provide the current-time source; tests override it with a frozen clock"""
    return datetime.now


def get_extractor() -> NotificationExtractor:
    """Provide notification extractor configured from settings"""
    return NotificationExtractor()
