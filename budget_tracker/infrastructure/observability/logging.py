"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from budget_tracker.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_extraction(
    request_id: str,
    detected: bool,
    direction: Optional[str] = None,
    category: Optional[str] = None,
    saved: bool = False,
) -> None:
    """Log structured extraction outcome; the raw message text is never logged"""
    logging.info(
        "Extraction completed",
        extra={
            "request_id": request_id,
            "step": "extraction_complete",
            "outcome": "detected" if detected else "not_detected",
            "direction": direction,
            "category": category,
            "saved": saved,
        },
    )


def log_request(request_id: str, method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Access log line emitted once per HTTP request"""
    logging.info(
        "Request completed",
        extra={
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        },
    )
