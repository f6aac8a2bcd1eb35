"""
Market Price API Client.

All communication with the pricing provider goes through this module:
- Fetching the day's market prices (GraphQL over HTTP POST)
- Mapping the provider payload to PriceSample records
- Pinging the optional healthcheck
"""
import logging
from datetime import datetime, timezone

import requests

from .config import (
    PRICE_API_URL,
    PRICE_API_HEADERS,
    PRICE_FIELD,
    REQUEST_TIMEOUT,
    HEALTHCHECK_URL,
)
from .models import PriceSample

logger = logging.getLogger(__name__)

MARKET_PRICES_QUERY = """
query MarketPrices($date: String!) {
  marketPrices(date: $date) {
    electricityPrices {
      from
      till
      marketPrice
      allInPrice
      perUnit
    }
  }
}
"""


class PriceApiError(Exception):
    """General error talking to the pricing provider."""


class NetworkError(PriceApiError):
    """Transport failure: connection, timeout, HTTP status or undecodable body."""


# =============================================================================
# Price API
# =============================================================================

def fetch_market_prices(day, url=PRICE_API_URL, timeout=REQUEST_TIMEOUT):
    """Fetch the provider's market prices for one day.

    Args:
        day: date whose prices to request
        url: GraphQL endpoint
        timeout: Request timeout in seconds

    Returns:
        dict: Decoded JSON response body

    Raises:
        NetworkError: On any transport failure. Not retried here; the next
        scheduled run is the retry.
    """
    body = {
        "query": MARKET_PRICES_QUERY,
        "variables": {"date": day.isoformat()},
        "operationName": "MarketPrices",
    }

    try:
        response = requests.post(url, headers=PRICE_API_HEADERS, json=body, timeout=timeout)
    except requests.RequestException as e:
        raise NetworkError(f"Error fetching electricity prices: {e}") from e

    if not 200 <= response.status_code < 300:
        raise NetworkError(f"Error getting electricity prices: Status {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise NetworkError(f"Price API returned a non-JSON body: {e}") from e

    if isinstance(data, dict) and data.get("errors"):
        messages = "; ".join(str(err.get("message", err)) for err in data["errors"] if isinstance(err, dict))
        logger.warning(f"Price API reported GraphQL errors: {messages or data['errors']}")

    return data


def _parse_timestamp(value):
    # fromisoformat only accepts a trailing 'Z' from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    # Offset-less timestamps are taken as UTC so they compare with an aware now
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_price_samples(payload, price_field=PRICE_FIELD):
    """Map a provider payload to PriceSample records.

    Malformed payloads degrade to an empty list; malformed entries are
    skipped.

    Args:
        payload: Decoded JSON as returned by fetch_market_prices()
        price_field: Provider field used as the sample price

    Returns:
        list: PriceSample records in provider order
    """
    try:
        entries = payload["data"]["marketPrices"]["electricityPrices"]
    except (KeyError, TypeError):
        logger.warning("No electricityPrices in API response")
        return []

    if not isinstance(entries, list):
        logger.warning(f"Unexpected electricityPrices type: {type(entries).__name__}")
        return []

    samples = []
    skipped = 0
    for entry in entries:
        try:
            sample = PriceSample(
                start=_parse_timestamp(entry["from"]),
                end=_parse_timestamp(entry["till"]),
                price=float(entry[price_field]),
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            skipped += 1
            continue
        samples.append(sample)

    if skipped:
        logger.warning(f"Skipped {skipped} malformed price entries")
    logger.info(f"Parsed {len(samples)} price samples ({price_field})")
    return samples


# =============================================================================
# Healthcheck
# =============================================================================

def ping_healthcheck(success=True):
    """Ping healthcheck service to indicate the widget refreshed.

    Args:
        success: True if the refresh completed, False if it failed
    """
    if not HEALTHCHECK_URL:
        return  # Healthcheck not configured

    try:
        # Append /fail to URL if the refresh failed
        url = HEALTHCHECK_URL if success else f"{HEALTHCHECK_URL}/fail"
        response = requests.get(url, timeout=10)
        if response.status_code == 200:
            logger.debug(f"Healthcheck ping sent successfully ({'success' if success else 'failure'})")
        else:
            logger.warning(f"Healthcheck ping returned status {response.status_code}")
    except requests.RequestException as e:
        logger.warning(f"Failed to ping healthcheck: {e}")
