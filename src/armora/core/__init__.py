"""Core services and utilities for Armora."""

from .error_handling import degrade_on_error, error_code_for
from .exceptions import (
    InvalidStepIdError,
    RecordNotFoundError,
    ResponseFormatError,
    UnknownRiskLevelError,
)
from .logging import LogContext, get_logger, setup_logging

__all__ = [
    # Error handling
    "degrade_on_error",
    "error_code_for",
    # Exceptions
    "InvalidStepIdError",
    "RecordNotFoundError",
    "ResponseFormatError",
    "UnknownRiskLevelError",
    # Logging
    "LogContext",
    "get_logger",
    "setup_logging",
]
