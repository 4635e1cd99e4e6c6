"""
Benchmark harness for the matching engine.

Generates two random sides, runs the engine once per worker count and
reports timings together with whether every run produced the same output.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence
import logging
import random

from .matching.engine import ReconciliationEngine
from .models.record import Matched, MatchOutcome, Record

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Timing of one engine run."""

    workers: int
    elapsed_seconds: float
    outcome_count: int
    matched_count: int
    # Same output as the first run in the batch
    identical: bool


def generate_records(
    count: int,
    seed: Optional[int] = None,
    max_amount: int = 100_000,
    start_id: int = 1,
) -> list[Record]:
    """
    Generate random records.

    Args:
        count: Number of records
        seed: Seed for reproducible data
        max_amount: Largest amount in minor units
        start_id: First record id

    Returns:
        Records with consecutive ids and amounts in ``[0, max_amount]``
    """
    rng = random.Random(seed)
    return [
        Record(id=start_id + i, amount=rng.randint(0, max_amount))
        for i in range(count)
    ]


def run_benchmark(
    size: int,
    variance: int,
    worker_counts: Sequence[int] = (1, 4),
    seed: Optional[int] = None,
    max_amount: int = 100_000,
) -> list[BenchmarkResult]:
    """
    Time the engine over the same random input for each worker count.

    Args:
        size: Records per side
        variance: Variance in minor units
        worker_counts: Proposing thread counts to try, in order
        seed: Seed for reproducible data
        max_amount: Largest generated amount in minor units

    Returns:
        One result per worker count
    """
    side1 = generate_records(size, seed=seed, max_amount=max_amount)
    side2 = generate_records(
        size,
        seed=None if seed is None else seed + 1,
        max_amount=max_amount,
        start_id=size + 1,
    )

    results: list[BenchmarkResult] = []
    baseline: Optional[list[MatchOutcome]] = None

    for workers in worker_counts:
        engine = ReconciliationEngine(workers=workers)
        start_time = datetime.now()
        outcomes = engine.reconcile(side1, side2, variance)
        elapsed = (datetime.now() - start_time).total_seconds()

        if baseline is None:
            baseline = outcomes

        result = BenchmarkResult(
            workers=workers,
            elapsed_seconds=elapsed,
            outcome_count=len(outcomes),
            matched_count=sum(1 for o in outcomes if isinstance(o, Matched)),
            identical=outcomes == baseline,
        )
        logger.info(
            f"[{workers} worker(s)] {elapsed:.3f}s, {result.matched_count} matches, "
            f"identical={result.identical}"
        )
        results.append(result)

    return results
