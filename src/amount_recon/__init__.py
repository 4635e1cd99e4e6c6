"""Two-sided amount reconciliation with a variance tolerance."""

from .matching.engine import ReconciliationEngine, reconcile
from .models.record import (
    Matched,
    MatchOutcome,
    Record,
    ReconciliationSummary,
    UnmatchedSide1,
    UnmatchedSide2,
)

__version__ = "0.1.0"

__all__ = [
    "ReconciliationEngine",
    "reconcile",
    "Matched",
    "MatchOutcome",
    "Record",
    "ReconciliationSummary",
    "UnmatchedSide1",
    "UnmatchedSide2",
    "__version__",
]
