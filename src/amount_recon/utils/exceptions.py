"""Custom exceptions for the reconciliation engine."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class InvalidVarianceError(ReconciliationError):
    """Variance is negative or not a scaled integer."""

    pass


class AmountOverflowError(ReconciliationError):
    """Amount or variance outside the representable scaled-integer range."""

    pass


class InvalidAmountError(ReconciliationError):
    """Amount text is not a finite decimal at the configured scale."""

    pass


class RecordParseError(ReconciliationError):
    """Error loading records from an input file."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class ReconciliationCancelledError(ReconciliationError):
    """Reconciliation was cancelled before the commit phase finished."""

    pass
