"""
Candidate selection against the amount index.
Proposes a bucket without claiming anything.
"""

from typing import Optional

from .index import AmountIndex


class CandidateSelector:
    """
    Picks the best available side-2 bucket for a side-1 amount.

    Best means the smallest absolute difference; on equal difference the
    lower amount wins. Among records of one amount the index itself hands
    out the earliest side-2 record, so FIFO priority needs no work here.
    """

    def __init__(self, index: AmountIndex, variance: int):
        """
        Args:
            index: Index to query (read-only from here)
            variance: Maximum allowed absolute difference, scaled
        """
        self.index = index
        self.variance = variance

    def select(self, amount: int) -> Optional[int]:
        """
        Propose a bucket for ``amount``.

        Returns:
            The proposed bucket amount, or None when nothing within the
            variance is available
        """
        best: Optional[int] = None
        best_diff = 0

        # Ascending scan: a strict comparison keeps the lower amount on ties
        for candidate, _ in self.index.query_range(
            amount - self.variance, amount + self.variance
        ):
            diff = abs(amount - candidate)
            if best is None or diff < best_diff:
                best = candidate
                best_diff = diff

        return best

    def in_range(self, amount: int, candidate: int) -> bool:
        """Check a candidate amount against the variance."""
        return abs(amount - candidate) <= self.variance
