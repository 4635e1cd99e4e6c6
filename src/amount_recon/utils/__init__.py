"""Utility modules."""

from .amounts import (
    MAX_SCALED_AMOUNT,
    MIN_SCALED_AMOUNT,
    check_scaled,
    format_scaled,
    to_scaled,
)
from .exceptions import (
    ReconciliationError,
    InvalidVarianceError,
    AmountOverflowError,
    InvalidAmountError,
    RecordParseError,
    ConfigurationError,
    ReconciliationCancelledError,
)
from .logging_config import setup_logging

__all__ = [
    "MAX_SCALED_AMOUNT",
    "MIN_SCALED_AMOUNT",
    "check_scaled",
    "format_scaled",
    "to_scaled",
    "ReconciliationError",
    "InvalidVarianceError",
    "AmountOverflowError",
    "InvalidAmountError",
    "RecordParseError",
    "ConfigurationError",
    "ReconciliationCancelledError",
    "setup_logging",
]
