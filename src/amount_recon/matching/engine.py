"""
Two-phase matching engine for amount reconciliation.

Proposals are computed in parallel against a read-only view of the side-2
index; claims are then committed one side-1 record at a time in input
order. A proposal still available at commit time is the best choice among
what remains; a stale one is recomputed against the current index. The
result equals a sequential greedy run for any number of workers.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Optional, Sequence
import logging
import threading

from ..config import ReconConfig
from ..models.record import (
    Matched,
    MatchOutcome,
    Record,
    ReconciliationSummary,
    UnmatchedSide1,
    UnmatchedSide2,
)
from ..utils.amounts import check_scaled
from ..utils.exceptions import (
    ConfigurationError,
    InvalidVarianceError,
    ReconciliationCancelledError,
)
from .index import AmountIndex
from .results import ResultBuilder
from .selector import CandidateSelector

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """
    Main reconciliation engine that orchestrates the matching process.

    The engine holds configuration only. Every ``reconcile`` call builds
    and consumes its own index, so one engine may serve many calls.
    """

    def __init__(self, config: Optional[ReconConfig] = None, workers: Optional[int] = None):
        """
        Initialize the reconciliation engine.

        Args:
            config: Application configuration (defaults if omitted)
            workers: Override for the number of proposing threads
        """
        self.config = config or ReconConfig()
        self.workers = workers if workers is not None else self.config.matching.workers
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")

    def reconcile(
        self,
        side1: Sequence[Record],
        side2: Sequence[Record],
        variance: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[MatchOutcome]:
        """
        Pair side-1 records with side-2 records within the variance.

        Args:
            side1: Side-1 records; their order drives commit priority and output order
            side2: Side-2 records; their order breaks ties among equal amounts
            variance: Maximum absolute difference in minor units; the
                configured variance is used when omitted
            cancel_event: Checked between commits; when set the call aborts

        Returns:
            Matched/UnmatchedSide1 outcomes in side-1 order, then
            UnmatchedSide2 outcomes in side-2 order

        Raises:
            InvalidVarianceError: If variance is negative
            AmountOverflowError: If variance is outside the scaled range
            ReconciliationCancelledError: If cancel_event was set mid-run
        """
        if variance is None:
            variance = self.config.matching.scaled_variance()
        self._validate_variance(variance)

        start_time = datetime.now()
        logger.info(
            f"Starting reconciliation: {len(side1)} side-1 records, "
            f"{len(side2)} side-2 records, variance {variance}, "
            f"{self.workers} worker(s)"
        )

        index = AmountIndex(side2)
        selector = CandidateSelector(index, variance)

        proposals = self._propose(side1, selector)
        builder = ResultBuilder(len(side1))
        self._commit(side1, proposals, index, selector, builder, cancel_event)
        builder.add_leftovers(index.drain())
        outcomes = builder.build()

        elapsed = (datetime.now() - start_time).total_seconds()
        matched = sum(1 for o in outcomes if isinstance(o, Matched))
        logger.info(
            f"Reconciliation complete in {elapsed:.2f}s: {matched} matches, "
            f"{len(side1) - matched} side-1 only, {len(side2) - matched} side-2 only"
        )

        return outcomes

    def _validate_variance(self, variance: int) -> None:
        if isinstance(variance, bool) or not isinstance(variance, int):
            raise InvalidVarianceError(
                f"Variance must be a scaled integer, got {type(variance).__name__}"
            )
        if variance < 0:
            raise InvalidVarianceError(f"Variance must be non-negative, got {variance}")
        check_scaled(variance, what="variance")

    def _propose(
        self, side1: Sequence[Record], selector: CandidateSelector
    ) -> list[Optional[int]]:
        """
        Proposing phase: one tentative bucket per side-1 record.

        Nothing is claimed here, so workers may freely propose the same bucket.
        """
        if self.workers == 1 or len(side1) < 2:
            return [selector.select(record.amount) for record in side1]

        # map() yields in submission order, which keeps proposals positional
        with ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="propose"
        ) as pool:
            return list(pool.map(selector.select, [record.amount for record in side1]))

    def _commit(
        self,
        side1: Sequence[Record],
        proposals: list[Optional[int]],
        index: AmountIndex,
        selector: CandidateSelector,
        builder: ResultBuilder,
        cancel_event: Optional[threading.Event],
    ) -> None:
        """Committing phase: claim proposals in side-1 order, re-proposing once on a miss."""
        reproposed = 0

        for position, record in enumerate(side1):
            if cancel_event is not None and cancel_event.is_set():
                raise ReconciliationCancelledError(
                    f"Reconciliation cancelled after {position} of {len(side1)} side-1 records"
                )

            claimed = self._try_claim(record, proposals[position], index, selector)
            if claimed is None and proposals[position] is not None:
                # Lost the bucket to an earlier commit; look again at what is left
                reproposed += 1
                claimed = self._try_claim(
                    record, selector.select(record.amount), index, selector
                )

            if claimed is None:
                builder.add_unmatched_side1(position, record)
            else:
                builder.add_match(position, record, claimed)

        logger.debug(f"Commit phase done: {reproposed} proposal(s) recomputed")

    def _try_claim(
        self,
        record: Record,
        proposal: Optional[int],
        index: AmountIndex,
        selector: CandidateSelector,
    ) -> Optional[Record]:
        if proposal is None or not selector.in_range(record.amount, proposal):
            return None
        return index.claim(proposal)

    def generate_summary(
        self,
        outcomes: Sequence[MatchOutcome],
        variance: int,
        processing_time: float = 0.0,
    ) -> ReconciliationSummary:
        """
        Generate a summary of the reconciliation results.

        Args:
            outcomes: Outcomes returned by ``reconcile``
            variance: Variance used for the run, in minor units
            processing_time: Time taken in seconds

        Returns:
            Reconciliation summary object
        """
        matches = [o for o in outcomes if isinstance(o, Matched)]
        unmatched_side1 = sum(1 for o in outcomes if isinstance(o, UnmatchedSide1))
        unmatched_side2 = sum(1 for o in outcomes if isinstance(o, UnmatchedSide2))

        return ReconciliationSummary(
            side1_count=len(matches) + unmatched_side1,
            side2_count=len(matches) + unmatched_side2,
            matched_count=len(matches),
            unmatched_side1_count=unmatched_side1,
            unmatched_side2_count=unmatched_side2,
            exact_match_count=sum(1 for m in matches if m.is_exact_match),
            total_variance=sum(m.diff for m in matches),
            variance=variance,
            workers=self.workers,
            processing_time_seconds=processing_time,
        )


def reconcile(
    side1: Sequence[Record],
    side2: Sequence[Record],
    variance: int,
    workers: int = 1,
) -> list[MatchOutcome]:
    """
    Reconcile two sides with default configuration.

    Args:
        side1: Side-1 records in input order
        side2: Side-2 records in input order
        variance: Maximum absolute difference in minor units
        workers: Threads used for the proposing phase

    Returns:
        Ordered list of outcomes
    """
    return ReconciliationEngine(workers=workers).reconcile(side1, side2, variance)
