"""
Energy Prices Widget - Refresh Cycle.

This module contains the widget refresh that:
1. Loads prices through the freshness-gated cache
2. Builds the price summary for the coming hours
3. Renders the chart and writes it for display
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial
from zoneinfo import ZoneInfo

from .cache import FileStorage, PriceCache
from .config import (
    CACHE_DIR,
    CACHE_FILE,
    CACHE_DURATION_HOURS,
    CHART_OUTPUT,
    CHEAPEST_WINDOW_HOURS,
    HORIZON_HOURS,
    TIMEZONE,
)
from .models import InsufficientData
from .price_client import PriceApiError, fetch_market_prices, parse_price_samples, ping_healthcheck
from .renderer import render_chart, render_message
from .summary import build_summary

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_NO_DATA = "no_data"
STATUS_INSUFFICIENT_DATA = "insufficient_data"
STATUS_ERROR = "error"

NO_DATA_TEXT = "No electricity price data"


@dataclass
class WidgetResult:
    """Outcome of one refresh: display status, title text and PNG image (if rendered)."""
    status: str
    title: str
    image: bytes = None
    summary: object = None


def load_price_payload(now, storage=None, fetch=None, max_age=None):
    """Return the provider payload, served from cache while fresh.

    Args:
        now: Reference instant for cache age
        storage: StorageHandle (defaults to FileStorage in CACHE_DIR)
        fetch: Zero-argument fetch callable (defaults to today's market prices)
        max_age: Freshness duration (defaults to CACHE_DURATION_HOURS)
    """
    if storage is None:
        storage = FileStorage(CACHE_DIR)
    if fetch is None:
        fetch = partial(fetch_market_prices, now.date())
    if max_age is None:
        max_age = timedelta(hours=CACHE_DURATION_HOURS)
    return PriceCache().get_or_fetch(CACHE_FILE, max_age, fetch, storage, now)


def analyze(now, storage=None, fetch=None, max_age=None):
    """Load prices and build the summary, without rendering.

    Returns:
        WidgetResult with image None. Transport errors are returned as
        STATUS_ERROR.
    """
    try:
        payload = load_price_payload(now, storage=storage, fetch=fetch, max_age=max_age)
    except PriceApiError as e:
        logger.error(f"Failed to get electricity prices: {e}")
        return WidgetResult(STATUS_ERROR, "Price data unavailable")

    samples = parse_price_samples(payload)
    if not samples:
        logger.warning(NO_DATA_TEXT)
        return WidgetResult(STATUS_NO_DATA, NO_DATA_TEXT)

    summary = build_summary(samples, now, HORIZON_HOURS, CHEAPEST_WINDOW_HOURS)
    if isinstance(summary, InsufficientData):
        logger.warning(f"{summary.reason} ({summary.sample_count} samples)")
        return WidgetResult(STATUS_INSUFFICIENT_DATA, summary.reason, summary=summary)

    logger.info(f"Price range: {summary.min_price:.2f} - {summary.max_price:.2f} over {len(summary.prices)} hours")
    if summary.cheapest_window is not None:
        window = summary.cheapest_window
        logger.info(f"Cheapest {window.length}h window starts at {window.starts_at:%H:%M} ({window.hours_offset:+d}h)")

    return WidgetResult(STATUS_OK, summary.title, summary=summary)


def refresh(now, storage=None, fetch=None, max_age=None):
    """Run one refresh without writing output files or pinging healthchecks.

    Returns:
        WidgetResult carrying the chart, or a status placeholder image.
    """
    result = analyze(now, storage=storage, fetch=fetch, max_age=max_age)
    if result.status == STATUS_OK:
        result.image = render_chart(result.summary)
    else:
        result.image = render_message(result.title)
    return result


def run_widget(now=None, storage=None, fetch=None, max_age=None, output=CHART_OUTPUT):
    """Execute one widget refresh cycle and write the chart to output."""
    logger.info("=" * 60)
    logger.info("Energy Prices Widget")
    logger.info("=" * 60)

    if now is None:
        now = datetime.now(ZoneInfo(TIMEZONE))

    result = refresh(now, storage=storage, fetch=fetch, max_age=max_age)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.image)
    logger.info(f"Title: {result.title}")
    logger.info(f"Chart written to {output}")
    logger.info("=" * 60)

    # Not-enough-data is a normal display state; only transport errors count as failures
    ping_healthcheck(success=result.status != STATUS_ERROR)
    return result
