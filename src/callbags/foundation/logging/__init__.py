"""Structured logging module: context-aware key/value logging."""

from .logger import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogRenderer,
    MemoryRenderer,
    NoOpRenderer,
    StructuredLogger,
    configure_logging,
    get_logger,
    lifecycle_logger,
    log_context,
    reset_logging,
    violation_logger,
)

__all__ = [
    "BoundLogger",
    "ConsoleRenderer",
    "JsonRenderer",
    "LogEntry",
    "LogRenderer",
    "MemoryRenderer",
    "NoOpRenderer",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "lifecycle_logger",
    "log_context",
    "reset_logging",
    "violation_logger",
]
