"""
Amount index over side-2 records.

Records are bucketed by exact scaled amount. Bucket keys are kept in a sorted
list so range queries are two bisections plus a slice; each bucket carries its
own lock so claims on different amounts never contend.
"""

from bisect import bisect_left, bisect_right
from collections import deque
from typing import Iterable, Optional
import logging
import threading

from ..models.record import Record

logger = logging.getLogger(__name__)


class _Bucket:
    """FIFO queue of unclaimed records sharing one amount."""

    __slots__ = ("amount", "queue", "lock")

    def __init__(self, amount: int):
        self.amount = amount
        # (side-2 input position, record)
        self.queue: deque[tuple[int, Record]] = deque()
        self.lock = threading.Lock()

    def available(self) -> int:
        with self.lock:
            return len(self.queue)


class AmountIndex:
    """
    Ordered index of side-2 records keyed by amount.

    Built once per reconciliation call and fully consumed by it. Reads
    (``query_range``) are safe from any number of threads; ``claim`` pops
    under the bucket lock so a record is handed out at most once.
    """

    def __init__(self, records: Iterable[Record]):
        """
        Build the index from side-2 records in input order.

        Args:
            records: Side-2 records; their order sets FIFO priority
                among records of equal amount
        """
        self._buckets: dict[int, _Bucket] = {}
        count = 0
        for position, record in enumerate(records):
            bucket = self._buckets.get(record.amount)
            if bucket is None:
                bucket = self._buckets[record.amount] = _Bucket(record.amount)
            bucket.queue.append((position, record))
            count += 1

        # Readers take one reference to the key list; compaction swaps in a
        # new list rather than editing it, so a reader never sees a half-built one.
        self._amounts: list[int] = sorted(self._buckets)
        self._exhausted = 0
        self._compact_lock = threading.Lock()
        logger.debug(
            f"Built amount index: {count} records in {len(self._amounts)} buckets"
        )

    def __len__(self) -> int:
        """Number of records not yet claimed or drained."""
        return sum(bucket.available() for bucket in self._buckets.values())

    def query_range(self, lo: int, hi: int) -> list[tuple[int, int]]:
        """
        List buckets with amounts in ``[lo, hi]``.

        Args:
            lo: Lowest amount, inclusive
            hi: Highest amount, inclusive

        Returns:
            ``(amount, available_count)`` pairs in ascending amount order,
            exhausted buckets omitted
        """
        if lo > hi:
            return []
        amounts = self._amounts
        start = bisect_left(amounts, lo)
        stop = bisect_right(amounts, hi)
        result = []
        for amount in amounts[start:stop]:
            available = self._buckets[amount].available()
            if available:
                result.append((amount, available))
        return result

    def claim(self, amount: int) -> Optional[Record]:
        """
        Remove and return the oldest unclaimed record at exactly ``amount``.

        Returns:
            The claimed record, or None if the bucket is empty or unknown
        """
        bucket = self._buckets.get(amount)
        if bucket is None:
            return None
        with bucket.lock:
            if not bucket.queue:
                return None
            _, record = bucket.queue.popleft()
            exhausted = not bucket.queue
        if exhausted:
            self._retire_bucket()
        return record

    def _retire_bucket(self) -> None:
        """Drop exhausted keys once they make up half of the key list."""
        with self._compact_lock:
            self._exhausted += 1
            if self._exhausted * 2 < len(self._amounts):
                return
            live = [a for a in self._amounts if self._buckets[a].available()]
            logger.debug(
                f"Compacted amount index: {len(self._amounts)} -> {len(live)} buckets"
            )
            self._amounts = live
            self._exhausted = 0

    def drain(self) -> list[Record]:
        """
        Remove every remaining record.

        Returns:
            The unclaimed records in original side-2 input order. A second
            call returns an empty list.
        """
        remaining: list[tuple[int, Record]] = []
        for bucket in self._buckets.values():
            with bucket.lock:
                remaining.extend(bucket.queue)
                bucket.queue.clear()
        remaining.sort(key=lambda entry: entry[0])

        with self._compact_lock:
            self._amounts = []
            self._exhausted = 0

        logger.debug(f"Drained {len(remaining)} unclaimed records")

        return [record for _, record in remaining]

