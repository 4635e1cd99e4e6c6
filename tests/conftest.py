"""Shared fixtures and helpers for the amount_recon test suite."""

import logging
from pathlib import Path

import pytest

from amount_recon.config import ReconConfig
from amount_recon.models.record import (
    Matched,
    MatchOutcome,
    Record,
    UnmatchedSide1,
    UnmatchedSide2,
)


def _side(*pairs: tuple[int, int]) -> list[Record]:
    """Build a side from (id, scaled amount) pairs."""
    return [Record(id=record_id, amount=amount) for record_id, amount in pairs]


def _greedy_reference(
    side1: list[Record], side2: list[Record], variance: int
) -> list[MatchOutcome]:
    """Naive sequential greedy matcher used as an oracle."""
    available = list(enumerate(side2))
    outcomes: list[MatchOutcome] = []

    for s1 in side1:
        eligible = [
            (abs(s1.amount - s2.amount), s2.amount, position, s2)
            for position, s2 in available
            if abs(s1.amount - s2.amount) <= variance
        ]
        if not eligible:
            outcomes.append(UnmatchedSide1(s1.id, s1.amount))
            continue
        diff, _, position, s2 = min(eligible, key=lambda e: e[:3])
        available = [(p, r) for p, r in available if p != position]
        outcomes.append(Matched(s1.id, s2.id, s1.amount, s2.amount, diff))

    outcomes.extend(UnmatchedSide2(s2.id, s2.amount) for _, s2 in available)
    return outcomes


def _write_csv(path: Path, rows: list[tuple[str, str]], header: str = "id,amount") -> Path:
    """Write a small side file."""
    lines = [header] + [f"{record_id},{amount}" for record_id, amount in rows]
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def config() -> ReconConfig:
    """Default configuration."""
    return ReconConfig()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI attaches so they do not outlive a test's streams."""
    yield
    logger = logging.getLogger("amount_recon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
