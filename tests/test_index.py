import threading

from amount_recon.matching.index import AmountIndex
from amount_recon.matching.selector import CandidateSelector

from tests.conftest import _side


class TestAmountIndex:
    """Bucketing, range queries, claims and drain."""

    def test_query_range_is_ordered_and_inclusive(self):
        index = AmountIndex(_side((1, 500), (2, 300), (3, 400), (4, 400), (5, 900)))

        assert index.query_range(300, 500) == [(300, 1), (400, 2), (500, 1)]
        assert index.query_range(301, 499) == [(400, 2)]
        assert index.query_range(1000, 2000) == []

    def test_inverted_range_is_empty(self):
        index = AmountIndex(_side((1, 500)))
        assert index.query_range(600, 400) == []

    def test_claim_is_fifo_within_bucket(self):
        index = AmountIndex(_side((8, 500), (9, 500)))

        assert index.claim(500).id == 8
        assert index.claim(500).id == 9
        assert index.claim(500) is None

    def test_claim_unknown_amount(self):
        index = AmountIndex(_side((8, 500)))
        assert index.claim(501) is None

    def test_claimed_record_not_exposed(self):
        index = AmountIndex(_side((8, 500)))
        index.claim(500)

        assert index.query_range(0, 1000) == []
        assert len(index) == 0

    def test_exhausted_buckets_are_compacted_away(self):
        index = AmountIndex(_side(*[(i, i) for i in range(100)]))
        for amount in range(60):
            assert index.claim(amount).id == amount

        assert index.query_range(0, 99) == [(a, 1) for a in range(60, 100)]
        assert len(index._amounts) <= 50
        assert index.claim(10) is None
        assert index.claim(75).id == 75
        assert [r.id for r in index.drain()] == [a for a in range(60, 100) if a != 75]

    def test_drain_returns_remaining_in_input_order(self):
        index = AmountIndex(_side((1, 900), (2, 100), (3, 500), (4, 100)))
        index.claim(100)

        drained = index.drain()
        assert [r.id for r in drained] == [1, 3, 4]
        assert index.drain() == []
        assert index.claim(900) is None

    def test_empty_index(self):
        index = AmountIndex([])
        assert len(index) == 0
        assert index.query_range(-10, 10) == []
        assert index.drain() == []

    def test_concurrent_claims_hand_out_each_record_once(self):
        records = _side(*[(i, 500 + (i % 3)) for i in range(300)])
        index = AmountIndex(records)
        claimed: list[int] = []
        lock = threading.Lock()

        def worker():
            for amount in (500, 501, 502) * 200:
                record = index.claim(amount)
                if record is not None:
                    with lock:
                        claimed.append(record.id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(claimed) == list(range(300))
        assert index.drain() == []


class TestCandidateSelector:
    """Best-candidate choice without mutation."""

    def test_nearest_amount_wins(self):
        index = AmountIndex(_side((1, 380), (2, 410), (3, 450)))
        selector = CandidateSelector(index, variance=100)

        assert selector.select(400) == 410

    def test_tie_prefers_lower_amount(self):
        index = AmountIndex(_side((8, 350), (9, 450)))
        selector = CandidateSelector(index, variance=50)

        assert selector.select(400) == 350

    def test_nothing_within_variance(self):
        index = AmountIndex(_side((8, 350), (9, 450)))
        selector = CandidateSelector(index, variance=49)

        assert selector.select(400) is None

    def test_skips_exhausted_buckets(self):
        index = AmountIndex(_side((8, 400), (9, 420)))
        index.claim(400)
        selector = CandidateSelector(index, variance=50)

        assert selector.select(400) == 420

    def test_select_does_not_claim(self):
        index = AmountIndex(_side((8, 400)))
        selector = CandidateSelector(index, variance=0)

        assert selector.select(400) == 400
        assert selector.select(400) == 400
        assert len(index) == 1

    def test_in_range(self):
        selector = CandidateSelector(AmountIndex([]), variance=50)
        assert selector.in_range(400, 450)
        assert selector.in_range(400, 350)
        assert not selector.in_range(400, 451)
