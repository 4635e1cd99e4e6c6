"""Matching engine and its building blocks."""

from .engine import ReconciliationEngine, reconcile
from .index import AmountIndex
from .results import ResultBuilder
from .selector import CandidateSelector

__all__ = [
    "ReconciliationEngine",
    "reconcile",
    "AmountIndex",
    "ResultBuilder",
    "CandidateSelector",
]
