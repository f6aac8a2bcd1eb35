"""
Price summary builder.

Combines the horizon filter and the cheapest-window search into a single
display-ready Summary. Returns InsufficientData rather than raising when
the horizon holds fewer than two samples.
"""
import logging
import math
from datetime import timedelta

from .models import CheapestWindow, InsufficientData, Summary
from .price_logic import filter_forward, find_cheapest_window

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_HOURS = 12
DEFAULT_WINDOW_LENGTH = 4
MIN_SAMPLES = 2


def hours_until(start, now):
    """Whole hours from now until start, rounding halves up (2.5h -> 3)."""
    return math.floor((start - now) / timedelta(hours=1) + 0.5)


def build_summary(raw_prices, now, horizon_hours=DEFAULT_HORIZON_HOURS, window_length=DEFAULT_WINDOW_LENGTH):
    """Build the display summary for the samples ahead of now.

    Args:
        raw_prices: Iterable of PriceSample in any order
        now: Reference instant (never read from the clock here)
        horizon_hours: Forward-looking span for the filter
        window_length: Number of samples in the cheapest window

    Returns:
        Summary, or InsufficientData if fewer than 2 samples remain.
        A Summary without cheapest_window means fewer than window_length
        samples remained.
    """
    filtered = filter_forward(raw_prices, now, horizon_hours)
    if len(filtered) < MIN_SAMPLES:
        logger.info(f"Only {len(filtered)} samples in the next {horizon_hours}h, not enough for a graph")
        return InsufficientData(sample_count=len(filtered))

    prices = [s.price for s in filtered]

    cheapest = None
    found = find_cheapest_window(prices, window_length)
    if found is not None:
        start_index, length = found
        starts_at = filtered[start_index].start
        cheapest = CheapestWindow(
            start_index=start_index,
            length=length,
            hours_offset=hours_until(starts_at, now),
            starts_at=starts_at,
        )
    else:
        logger.info(f"Fewer than {window_length} samples, no cheapest window")

    return Summary(
        filtered_series=filtered,
        min_price=min(prices),
        max_price=max(prices),
        cheapest_window=cheapest,
    )
