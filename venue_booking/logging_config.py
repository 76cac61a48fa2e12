"""
Structured Logging Configuration
Version: 1.0

structlog on top of stdlib logging:
- JSON lines in production, colored console in development
- Booking session id propagated through async calls
- Every entry tagged with a category so operators can separate
  user-facing rule outcomes from backend availability problems
"""
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

import structlog


# Booking session id (propagated across async calls)
session_id_var: ContextVar[Optional[str]] = ContextVar('booking_session_id', default=None)

# Event names emitted for backend trouble rather than user input
BACKEND_EVENTS = frozenset({
    "conflict_check_unavailable",
    "conflict_check_invalid_payload",
    "catalog_load_failed",
    "booking_submission_failed",
})


def get_session_id() -> Optional[str]:
    return session_id_var.get()


def set_session_id(session_id: str) -> None:
    session_id_var.set(session_id)


def add_session_id(logger, method_name, event_dict):
    """Structlog processor to add the booking session id."""
    session_id = get_session_id()
    if session_id:
        event_dict['session_id'] = session_id
    return event_dict


def add_category(logger, method_name, event_dict):
    """Tag entries as 'backend' or 'booking' for filtering."""
    event = event_dict.get('event')
    event_dict.setdefault('category', 'backend' if event in BACKEND_EVENTS else 'booking')
    return event_dict


def add_timestamp(logger, method_name, event_dict):
    """Add ISO format timestamp."""
    event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_service_info(logger, method_name, event_dict):
    """Add service metadata."""
    event_dict['service'] = os.getenv('APP_NAME', 'venue-booking')
    event_dict['version'] = os.getenv('APP_VERSION', 'unknown')
    event_dict['environment'] = os.getenv('APP_ENV', 'development')
    return event_dict


def configure_logging(
    json_format: Optional[bool] = None,
    log_level: str = "INFO"
) -> None:
    """
    Configure structured logging for the application.

    Args:
        json_format: JSON output when True, console output when False.
                     None picks JSON in production.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    if json_format is None:
        json_format = os.getenv('APP_ENV', 'development') == 'production'

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_session_id,
        add_category,
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.extend([
            add_service_info,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.warning("conflict_check_unavailable", check_failed=True)
    """
    return structlog.get_logger(name)
