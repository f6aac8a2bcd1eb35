"""
Unit tests for the horizon filter and cheapest-window search.
Run with: pytest tests/ -v
"""

import random
from datetime import timedelta

import pytest

from energy_widget.price_logic import filter_forward, find_cheapest_window
from tests.helpers import NOW, make_samples


def naive_cheapest(values, k):
    """Reference scan: first index with the strictly smallest window sum."""
    if len(values) < k:
        return None
    sums = [sum(values[i:i + k]) for i in range(len(values) - k + 1)]
    return sums.index(min(sums)), k


class TestFilterForward:
    """Test the forward-looking horizon filter."""

    def test_excludes_past_samples(self):
        """Samples starting before now are dropped."""
        samples = make_samples(NOW - timedelta(hours=2), [1, 2, 3, 4])
        result = filter_forward(samples, NOW, 12)
        assert [s.price for s in result] == [3, 4]

    def test_includes_both_bounds(self):
        """Samples starting exactly at now and at now + horizon are kept."""
        samples = make_samples(NOW, [1, 2, 3, 4])
        result = filter_forward(samples, NOW, 3)
        assert [s.start for s in result] == [NOW + timedelta(hours=i) for i in range(4)]

    def test_excludes_beyond_horizon(self):
        """A sample starting one second past the horizon is dropped."""
        samples = make_samples(NOW + timedelta(seconds=1), [1, 2, 3, 4])
        result = filter_forward(samples, NOW, 3)
        assert [s.price for s in result] == [1, 2, 3]

    def test_end_time_not_considered(self):
        """A sample starting inside the horizon is kept even if it ends after it."""
        samples = make_samples(NOW + timedelta(minutes=30), [5.0], step=timedelta(hours=4))
        assert filter_forward(samples, NOW, 1) == samples

    def test_sorts_unordered_input(self):
        """Output is ordered by start time regardless of input order."""
        samples = make_samples(NOW, [1, 2, 3, 4, 5])
        shuffled = [samples[3], samples[0], samples[4], samples[2], samples[1]]
        assert filter_forward(shuffled, NOW, 12) == samples

    def test_duplicate_starts_keep_input_order(self):
        """Equal start times keep their relative input order."""
        first = make_samples(NOW, [7.0])[0]
        second = make_samples(NOW, [3.0])[0]
        result = filter_forward([first, second], NOW, 12)
        assert [s.price for s in result] == [7.0, 3.0]

    def test_empty_when_nothing_qualifies(self):
        """No error, just an empty list."""
        samples = make_samples(NOW - timedelta(hours=5), [1, 2, 3])
        assert filter_forward(samples, NOW, 12) == []
        assert filter_forward([], NOW, 12) == []

    def test_does_not_mutate_input(self):
        samples = make_samples(NOW, [3, 1, 2])
        reversed_samples = list(reversed(samples))
        snapshot = list(reversed_samples)
        filter_forward(reversed_samples, NOW, 12)
        assert reversed_samples == snapshot

    def test_rejects_non_positive_horizon(self):
        with pytest.raises(ValueError):
            filter_forward([], NOW, 0)

    def test_properties_on_random_input(self):
        """Bounds, ordering and idempotence hold for random sample sets."""
        rng = random.Random(42)
        for _ in range(50):
            offsets = [rng.randint(-24 * 60, 24 * 60) for _ in range(rng.randint(0, 40))]
            samples = [make_samples(NOW + timedelta(minutes=m), [rng.uniform(-5, 50)])[0] for m in offsets]
            horizon = rng.choice([1, 4, 12, 24])

            result = filter_forward(samples, NOW, horizon)

            for s in result:
                assert NOW <= s.start <= NOW + timedelta(hours=horizon)
            assert all(a.start <= b.start for a, b in zip(result, result[1:]))
            assert filter_forward(result, NOW, horizon) == result


class TestFindCheapestWindow:
    """Test the fixed-size minimum-sum window search."""

    def test_documented_example(self):
        """Sums [8, 4, 12] pick index 1."""
        assert find_cheapest_window([5, 1, 1, 1, 1, 9], 4) == (1, 4)

    def test_too_few_values(self):
        assert find_cheapest_window([3, 3, 3], 4) is None
        assert find_cheapest_window([], 1) is None

    def test_exact_length(self):
        """A sequence exactly as long as the window has one window at 0."""
        assert find_cheapest_window([9, 8, 7, 6], 4) == (0, 4)

    def test_ties_favour_earliest(self):
        assert find_cheapest_window([2, 2, 2, 2, 2, 2], 3) == (0, 3)
        assert find_cheapest_window([5, 1, 1, 5, 1, 1], 2) == (1, 2)

    def test_window_of_one_is_argmin(self):
        assert find_cheapest_window([4, 3, 0.5, 0.5, 7], 1) == (2, 1)

    def test_negative_prices(self):
        assert find_cheapest_window([1, -2, -3, 4, -1, -1], 2) == (1, 2)

    def test_does_not_mutate_input(self):
        values = [5, 1, 1, 1, 1, 9]
        find_cheapest_window(values, 4)
        assert values == [5, 1, 1, 1, 1, 9]

    def test_rejects_zero_window(self):
        with pytest.raises(ValueError):
            find_cheapest_window([1, 2, 3], 0)

    def test_matches_naive_scan(self):
        """Result equals the naive scan for random float and integer input."""
        rng = random.Random(7)
        for _ in range(200):
            k = rng.randint(1, 6)
            n = rng.randint(0, 30)
            if rng.random() < 0.5:
                values = [round(rng.uniform(-0.1, 0.6), 3) for _ in range(n)]
            else:
                values = [rng.randint(0, 3) for _ in range(n)]
            assert find_cheapest_window(values, k) == naive_cheapest(values, k)
