"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from nossos_gastos.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transactions_created(
    request_id: str,
    count: int,
    total_amount: float,
    group_id: Optional[str] = None,
    card_id: Optional[str] = None,
) -> None:
    """Log a saved lump-sum row or installment group"""
    logging.info(
        "Transactions created",
        extra={
            "request_id": request_id,
            "step": "installment_group_created" if group_id else "transaction_created",
            "installment_group_id": group_id,
            "card_id": card_id,
            "row_count": count,
            "total_amount": total_amount,
        },
    )


def log_group_deleted(request_id: str, group_id: str, deleted: int) -> None:
    logging.info(
        "Installment group deleted",
        extra={
            "request_id": request_id,
            "step": "installment_group_deleted",
            "installment_group_id": group_id,
            "row_count": deleted,
        },
    )
