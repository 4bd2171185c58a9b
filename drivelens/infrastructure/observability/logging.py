"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "drivelens"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_recommendation(
    request_id: str,
    variant: str,
    candidate_count: int,
    top_vehicle_id: str | None,
    duration_ms: float,
) -> None:
    """Log structured recommendation outcome for analysis"""
    logging.info(
        "Recommendation completed",
        extra={
            "request_id": request_id,
            "step": "recommendation_complete",
            "variant": variant,
            "candidate_count": candidate_count,
            "top_vehicle_id": top_vehicle_id,
            "duration_ms": duration_ms,
        },
    )


def log_eligibility(request_id: str, eligible: bool, reason: str | None) -> None:
    logging.info(
        "Eligibility checked",
        extra={
            "request_id": request_id,
            "step": "eligibility",
            "eligibility_outcome": "eligible" if eligible else "ineligible",
            "reason": reason,
        },
    )
