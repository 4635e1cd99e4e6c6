"""Data models for reconciliation."""

from .record import (
    Record,
    Matched,
    UnmatchedSide1,
    UnmatchedSide2,
    MatchOutcome,
    ReconciliationSummary,
)

__all__ = [
    "Record",
    "Matched",
    "UnmatchedSide1",
    "UnmatchedSide2",
    "MatchOutcome",
    "ReconciliationSummary",
]
