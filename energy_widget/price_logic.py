"""
Price Window Logic.

Contains the algorithms for:
- Narrowing raw price samples to a forward-looking horizon
- Finding the cheapest contiguous usage window
"""
import logging
from datetime import timedelta

logger = logging.getLogger(__name__)


def filter_forward(samples, now, horizon_hours):
    """Keep samples starting within [now, now + horizon_hours], oldest first.

    Only the sample start time is checked; a sample whose end time lies
    beyond the horizon is still kept.

    Args:
        samples: Iterable of PriceSample (any order, may contain duplicates)
        now: Reference instant
        horizon_hours: Forward-looking span in hours (> 0)

    Returns:
        list: Matching samples sorted by start time (stable for equal starts)
    """
    if horizon_hours <= 0:
        raise ValueError(f"horizon_hours must be positive, got {horizon_hours}")

    end_time = now + timedelta(hours=horizon_hours)
    selected = [s for s in samples if now <= s.start <= end_time]
    return sorted(selected, key=lambda s: s.start)


def find_cheapest_window(values, window_length):
    """Find the start index of the contiguous window with the lowest sum.

    Every window is summed from scratch so float results do not drift
    between windows. The first window reaching the minimum wins, so ties
    favour the soonest window.

    Args:
        values: Ordered sequence of prices
        window_length: Number of consecutive values in the window (>= 1)

    Returns:
        tuple: (start_index, window_length), or None if there are fewer
        values than window_length
    """
    if window_length < 1:
        raise ValueError(f"window_length must be at least 1, got {window_length}")

    if len(values) < window_length:
        return None

    best_sum, best_index = float("inf"), 0

    for i in range(len(values) - window_length + 1):
        window_sum = sum(values[i:i + window_length])
        if window_sum < best_sum:
            best_sum, best_index = window_sum, i

    logger.debug(f"Cheapest {window_length}-sample window starts at index {best_index} (sum {best_sum:.4f})")
    return best_index, window_length
