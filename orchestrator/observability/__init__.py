"""
Observability module.

Logging configuration and structured logging helpers.
"""

from orchestrator.observability.logger import configure_logging
from orchestrator.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)

__all__ = [
    "configure_logging",
    "log_with_context",
    "log_exception_with_context",
    "safe_log_value",
]
