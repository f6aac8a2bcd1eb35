"""
Data types shared by the price analysis, cache and rendering modules.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class PriceSample:
    """One hourly price quotation from the provider."""
    start: datetime
    end: datetime
    price: float


@dataclass(frozen=True)
class CheapestWindow:
    """Contiguous run of samples with the lowest summed price.

    hours_offset and starts_at are only filled in once the window has been
    placed on the time axis by the summary builder.
    """
    start_index: int
    length: int
    hours_offset: Optional[int] = None
    starts_at: Optional[datetime] = None

    @property
    def end_index(self):
        """Index of the last sample in the window (inclusive)."""
        return self.start_index + self.length - 1

    def contains(self, index):
        return self.start_index <= index <= self.end_index


@dataclass(frozen=True)
class Summary:
    """Display-ready result of one price analysis."""
    filtered_series: List[PriceSample]
    min_price: float
    max_price: float
    cheapest_window: Optional[CheapestWindow] = None

    @property
    def prices(self):
        """Price values of the filtered series, in order."""
        return [s.price for s in self.filtered_series]

    @property
    def baseline(self):
        """Chart zero line: 0 unless some price is negative."""
        return self.min_price if self.min_price < 0 else 0

    @property
    def offset_label(self):
        if self.cheapest_window is None:
            return ""
        if self.cheapest_window.hours_offset == 0:
            return " now"
        return f" @{self.cheapest_window.hours_offset}h"

    @property
    def title(self):
        """Widget title, e.g. '0.18 - 0.35 @3h' or '0.18 - 0.35 now'."""
        return f"{self.min_price:.2f} - {self.max_price:.2f}{self.offset_label}"


@dataclass(frozen=True)
class InsufficientData:
    """Normal outcome when too few samples fall inside the horizon."""
    sample_count: int
    reason: str = "Not enough data for graph"
