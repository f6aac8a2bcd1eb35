"""
Shared builders and doubles for the widget tests.
"""
from datetime import datetime, timedelta, timezone

from energy_widget.models import PriceSample

NOW = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


class MemoryStorage:
    """In-memory StorageHandle double; write time comes from the clock callable."""

    def __init__(self, clock=lambda: NOW):
        self.clock = clock
        self.entries = {}
        self.writes = 0

    def put(self, key, data, written_at):
        self.entries[key] = (data, written_at)

    def exists(self, key):
        return key in self.entries

    def age_of(self, key, now):
        return now - self.entries[key][1]

    def read(self, key):
        return self.entries[key][0]

    def write(self, key, data):
        self.writes += 1
        self.entries[key] = (data, self.clock())


def make_samples(start, prices, step=timedelta(hours=1)):
    """Hourly PriceSamples starting at start, one per price."""
    return [
        PriceSample(start=start + i * step, end=start + (i + 1) * step, price=p)
        for i, p in enumerate(prices)
    ]


def make_payload(start, prices, field="allInPrice"):
    """Provider-shaped payload with hourly entries starting at start."""
    entries = []
    for i, p in enumerate(prices):
        begin = start + timedelta(hours=i)
        entries.append({
            "from": begin.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            "till": (begin + timedelta(hours=1)).strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            "marketPrice": round(p - 0.15, 4),
            field: p,
            "perUnit": "KWH",
        })
    return {"data": {"marketPrices": {"electricityPrices": entries}}}


