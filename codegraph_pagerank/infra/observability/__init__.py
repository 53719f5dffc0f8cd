"""
Observability Infrastructure

Structured logging for the PageRank engine.
"""

from .logging import (
    LogPerformance,
    get_logger,
    log_error,
    log_performance,
    setup_logging,
)

__all__ = [
    "LogPerformance",
    "get_logger",
    "log_error",
    "log_performance",
    "setup_logging",
]
