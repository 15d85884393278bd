"""
Activity Logger

DESIGN DECISION: Every significant ledger action is logged as one
structured event. This provides:
1. Debugging capability
2. A readable trace of a session
3. Correlation IDs to tie the steps of one action together

The activity logger:
- Writes local log lines only; nothing is persisted with the ledger
- Never raises; a broken log handler must not break a ledger operation
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from budgetflow.config import get_settings
from budgetflow.models.events import EventSeverity, LedgerEvent


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Route activity events to stderr at the configured level.

    structlog hands its rendered JSON to the standard library logger,
    which decides what is shown.
    """
    level = level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("budgetflow").setLevel(level)


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize activity logger.

        Args:
            logger: Bound logger to write to.
                    If None, a structlog logger named "budgetflow" is used.
        """
        self._logger = logger or structlog.get_logger("budgetflow")

    def log(self, event: LedgerEvent) -> bool:
        """
        Log an activity event.

        Returns False if the log handler failed; the failure is swallowed.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity == EventSeverity.ERROR:
                self._logger.error("ledger_event", **log_dict)
            elif event.severity == EventSeverity.WARNING:
                self._logger.warning("ledger_event", **log_dict)
            elif event.severity == EventSeverity.DEBUG:
                self._logger.debug("ledger_event", **log_dict)
            else:
                self._logger.info("ledger_event", **log_dict)
        except Exception:
            return False
        return True


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g. an import) and pass it
    through the calls that make up that action.
    """
    return uuid4()
