"""
Console rendering of reconciliation results.
Plain text lines for each outcome plus rich tables for summaries.
"""

from typing import Iterable, Optional, Sequence

from rich.table import Table

from ..models.record import (
    Matched,
    MatchOutcome,
    Record,
    ReconciliationSummary,
    UnmatchedSide1,
    UnmatchedSide2,
)
from ..utils.amounts import DEFAULT_SCALE, format_scaled

NO_MATCH = "No Match"


def format_outcome(outcome: MatchOutcome, scale: int = DEFAULT_SCALE) -> str:
    """
    Render one outcome as a single line.

    Examples:
        ``Side1: 1 (5.00) <-> Side2: 9 (5.00)``
        ``Side1: 2 (7.10) <-> No Match``
        ``Side2: 8 (3.50) <-> No Match``
    """
    if isinstance(outcome, Matched):
        return (
            f"Side1: {outcome.side1_id} ({format_scaled(outcome.amount1, scale)}) <-> "
            f"Side2: {outcome.side2_id} ({format_scaled(outcome.amount2, scale)})"
        )
    if isinstance(outcome, UnmatchedSide1):
        return f"Side1: {outcome.side1_id} ({format_scaled(outcome.amount, scale)}) <-> {NO_MATCH}"
    if isinstance(outcome, UnmatchedSide2):
        return f"Side2: {outcome.side2_id} ({format_scaled(outcome.amount, scale)}) <-> {NO_MATCH}"
    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")


def format_outcomes(
    outcomes: Iterable[MatchOutcome], scale: int = DEFAULT_SCALE
) -> list[str]:
    return [format_outcome(outcome, scale) for outcome in outcomes]


def summary_table(summary: ReconciliationSummary, scale: int = DEFAULT_SCALE) -> Table:
    """Build the summary table shown after a run."""
    table = Table(title="Reconciliation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Side 1 Records", str(summary.side1_count))
    table.add_row("Side 2 Records", str(summary.side2_count))
    table.add_row("Variance", format_scaled(summary.variance, scale))
    table.add_row("Matched", str(summary.matched_count))
    table.add_row("Exact Matches", str(summary.exact_match_count))
    table.add_row("Side 1 Only", str(summary.unmatched_side1_count))
    table.add_row("Side 2 Only", str(summary.unmatched_side2_count))
    table.add_row("Total Variance", format_scaled(summary.total_variance, scale))
    table.add_row("Side 1 Match Rate", f"{summary.match_rate_side1:.1f}%")
    table.add_row("Side 2 Match Rate", f"{summary.match_rate_side2:.1f}%")
    table.add_row("Workers", str(summary.workers))
    table.add_row("Processing Time", f"{summary.processing_time_seconds:.2f}s")

    return table


def records_table(
    records: Sequence[Record],
    title: str,
    scale: int = DEFAULT_SCALE,
    limit: Optional[int] = 20,
) -> Table:
    """Build a table listing the first ``limit`` records of a side."""
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Amount", justify="right")

    shown = records if limit is None else records[:limit]
    for record in shown:
        table.add_row(str(record.id), format_scaled(record.amount, scale))

    return table
