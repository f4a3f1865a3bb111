"""Structured JSON logging.

Logs go to stderr; stdout carries the CSV result stream.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Global run ID for correlation across log entries
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Args:
        verbose: Log per-lookup DEBUG records as well.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter("%(message)s")
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    return logger


def log_lookup(result, duration_ms: int) -> None:
    """Log structured per-address lookup result at DEBUG.

    Args:
        result: LookupResult produced by a worker.
        duration_ms: Lookup time in milliseconds.
    """
    logger = logging.getLogger(__name__)
    logger.debug(
        "Lookup completed",
        extra={
            "ip": str(result.address),
            "error": result.error,
            "listed": result.is_listed(),
            "score": result.score,
            "age_days": result.age_days,
            "class_flags": int(result.class_flags),
            "duration_ms": duration_ms,
        },
    )


def log_lookup_failure(ip: str, reason: str, detail: str) -> None:
    """Log a lookup failure other than a plain not-listed NXDOMAIN.

    Args:
        ip: IPv4 address looked up.
        reason: Failure category (timeout, malformed_response, ...).
        detail: Exception text.
    """
    logger = logging.getLogger(__name__)
    logger.warning(
        "Lookup failed",
        extra={"ip": ip, "reason": reason, "detail": detail},
    )


def log_run_summary(
    total_ips: int,
    listed: int,
    not_listed: int,
    errors: int,
    workers: int,
    duration_sec: float,
) -> None:
    """Log run completion summary.

    Args:
        total_ips: Number of addresses looked up.
        listed: Number of listed addresses.
        not_listed: Number of NXDOMAIN or empty answers.
        errors: Number of failed lookups other than NXDOMAIN.
        workers: Resolver pool size.
        duration_sec: Total run time in seconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Run completed",
        extra={
            "total_ips": total_ips,
            "listed": listed,
            "not_listed": not_listed,
            "errors": errors,
            "workers": workers,
            "duration_sec": duration_sec,
        },
    )
