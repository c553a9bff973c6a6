"""Structured JSON logging for production observability"""

import logging
import sys
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from airtime_gateway.config import settings
from airtime_gateway.utils.date_utils import utc_now


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = utc_now().isoformat()
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


def log_claim(
    request_id: str,
    network: str,
    phone_number: str,
    outcome: str,
    status_code: int,
    duration_ms: float,
) -> None:
    """Log structured claim outcome for analysis"""
    logging.info(
        "Claim completed",
        extra={
            "request_id": request_id,
            "network": network,
            "phone_number": phone_number,
            "step": "claim_complete",
            "claim_outcome": outcome,
            "status_code": status_code,
            "duration_ms": duration_ms,
        },
    )
