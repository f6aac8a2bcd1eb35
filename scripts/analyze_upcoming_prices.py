"""Print the upcoming hourly prices and the cheapest window.

Purpose:
- Fetch today's market prices straight from the provider (cache bypassed)
- Run the same summary the widget uses
- Print one line per hour, marking the cheapest window

Usage (recommended):
  uv run python scripts/analyze_upcoming_prices.py

Optional:
  HORIZON_HOURS=24 CHEAPEST_WINDOW_HOURS=3 uv run python scripts/analyze_upcoming_prices.py
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from energy_widget.config import CHEAPEST_WINDOW_HOURS, HORIZON_HOURS, PRICE_FIELD, TIMEZONE
from energy_widget.models import InsufficientData
from energy_widget.price_client import fetch_market_prices, parse_price_samples
from energy_widget.summary import build_summary


def main() -> None:
    tz = ZoneInfo(TIMEZONE)
    now = datetime.now(tz)

    samples = parse_price_samples(fetch_market_prices(now.date()))
    print(f"Fetched {len(samples)} samples ({PRICE_FIELD}), now = {now:%Y-%m-%d %H:%M %Z}")

    summary = build_summary(samples, now, HORIZON_HOURS, CHEAPEST_WINDOW_HOURS)
    if isinstance(summary, InsufficientData):
        print(f"{summary.reason}: {summary.sample_count} samples in the next {HORIZON_HOURS}h")
        return

    window = summary.cheapest_window
    for i, sample in enumerate(summary.filtered_series):
        marker = "*" if window and window.contains(i) else " "
        print(f"  {marker} {sample.start.astimezone(tz):%H:%M}  {sample.price:8.4f}")

    print()
    print(f"Title: {summary.title}")


if __name__ == "__main__":
    main()
