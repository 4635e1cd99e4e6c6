"""Assembly of the ordered outcome sequence."""

from typing import Optional

from ..models.record import (
    Matched,
    MatchOutcome,
    Record,
    UnmatchedSide1,
    UnmatchedSide2,
)


class ResultBuilder:
    """
    Collects outcomes for one reconciliation call.

    Output order is fixed: one entry per side-1 record in side-1 input order,
    then the unclaimed side-2 records in side-2 input order.
    """

    def __init__(self, side1_count: int):
        self._side1: list[Optional[MatchOutcome]] = [None] * side1_count
        self._side2: list[UnmatchedSide2] = []

    def add_match(self, position: int, side1: Record, side2: Record) -> Matched:
        """Record a pairing for the side-1 record at ``position``."""
        outcome = Matched(
            side1_id=side1.id,
            side2_id=side2.id,
            amount1=side1.amount,
            amount2=side2.amount,
            diff=abs(side1.amount - side2.amount),
        )
        self._set(position, outcome)
        return outcome

    def add_unmatched_side1(self, position: int, side1: Record) -> UnmatchedSide1:
        outcome = UnmatchedSide1(side1_id=side1.id, amount=side1.amount)
        self._set(position, outcome)
        return outcome

    def add_leftovers(self, records: list[Record]) -> None:
        """Append drained side-2 records, already in side-2 input order."""
        self._side2.extend(
            UnmatchedSide2(side2_id=record.id, amount=record.amount)
            for record in records
        )

    def build(self) -> list[MatchOutcome]:
        """
        Return the final outcome list.

        Raises:
            RuntimeError: If a side-1 record was never resolved
        """
        missing = [i for i, outcome in enumerate(self._side1) if outcome is None]
        if missing:
            raise RuntimeError(
                f"{len(missing)} side-1 record(s) have no outcome, first at position {missing[0]}"
            )
        outcomes: list[MatchOutcome] = list(self._side1)  # type: ignore[arg-type]
        outcomes.extend(self._side2)
        return outcomes

    def _set(self, position: int, outcome: MatchOutcome) -> None:
        if self._side1[position] is not None:
            raise RuntimeError(f"Side-1 position {position} already has an outcome")
        self._side1[position] = outcome
