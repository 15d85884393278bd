"""Activity logging package."""

from budgetflow.activity.logger import (
    ActivityLogger,
    configure_logging,
    create_correlation_id,
)

__all__ = ["ActivityLogger", "configure_logging", "create_correlation_id"]
