"""Data models for reconciliation records and match outcomes."""

from dataclasses import dataclass
from typing import Union

from ..utils.amounts import check_scaled


@dataclass(frozen=True)
class Record:
    """
    A single record to reconcile.

    ``amount`` is a scaled integer in minor units. Construction validates
    the range, so an out-of-range amount fails at ingestion rather than
    somewhere inside the matcher.
    """

    id: int
    amount: int

    def __post_init__(self) -> None:
        check_scaled(self.amount, what=f"amount of record {self.id}")


@dataclass(frozen=True)
class Matched:
    """A side-1 record paired with a side-2 record within the variance."""

    side1_id: int
    side2_id: int
    amount1: int
    amount2: int
    diff: int

    @property
    def is_exact_match(self) -> bool:
        return self.diff == 0


@dataclass(frozen=True)
class UnmatchedSide1:
    """A side-1 record with no eligible side-2 counterpart."""

    side1_id: int
    amount: int


@dataclass(frozen=True)
class UnmatchedSide2:
    """A side-2 record left unclaimed after all side-1 records committed."""

    side2_id: int
    amount: int


MatchOutcome = Union[Matched, UnmatchedSide1, UnmatchedSide2]


@dataclass
class ReconciliationSummary:
    """Summary of one reconciliation call."""

    # Input sizes
    side1_count: int
    side2_count: int

    # Outcome counts
    matched_count: int
    unmatched_side1_count: int
    unmatched_side2_count: int
    exact_match_count: int

    # Sum of |amount1 - amount2| across matches, in minor units
    total_variance: int

    # Run parameters
    variance: int
    workers: int = 1
    processing_time_seconds: float = 0.0

    @property
    def match_rate_side1(self) -> float:
        """Percentage of side-1 records matched."""
        if self.side1_count == 0:
            return 0.0
        return (self.matched_count / self.side1_count) * 100

    @property
    def match_rate_side2(self) -> float:
        """Percentage of side-2 records matched."""
        if self.side2_count == 0:
            return 0.0
        return (self.matched_count / self.side2_count) * 100
