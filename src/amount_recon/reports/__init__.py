"""Console reports for reconciliation results."""

from .console_report import (
    format_outcome,
    format_outcomes,
    records_table,
    summary_table,
)

__all__ = [
    "format_outcome",
    "format_outcomes",
    "records_table",
    "summary_table",
]
