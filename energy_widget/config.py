"""
Configuration management for the Energy Prices Widget.

Loads settings from environment variables (.env file).
All configuration values are defined here.
"""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

PROJECT_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# Price API Configuration
# =============================================================================
PRICE_API_URL = os.getenv("PRICE_API_URL", "https://www.frankenergie.nl/graphql")
PRICE_API_COUNTRY = os.getenv("PRICE_API_COUNTRY", "NL")  # Sent as x-country header
PRICE_FIELD = os.getenv("PRICE_FIELD", "allInPrice")  # Or marketPrice for the bare spot price
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))  # Seconds

PRICE_API_HEADERS = {
    "Accept": "*/*",
    "Content-Type": "application/json",
    "x-country": PRICE_API_COUNTRY,
    "x-graphql-client-name": "frank-www",
}

# =============================================================================
# Price Window Settings
# =============================================================================
HORIZON_HOURS = float(os.getenv("HORIZON_HOURS", "12"))  # Forward-looking display window
CHEAPEST_WINDOW_HOURS = int(os.getenv("CHEAPEST_WINDOW_HOURS", "4"))  # Length of cheapest usage window

# =============================================================================
# Cache Settings
# =============================================================================
CACHE_DIR = Path(os.getenv("CACHE_DIR", str(PROJECT_DIR / "data")))
CACHE_FILE = os.getenv("CACHE_FILE", "energy_prices_cache.json")
CACHE_DURATION_HOURS = float(os.getenv("CACHE_DURATION_HOURS", "2"))

# =============================================================================
# Chart Output
# =============================================================================
CHART_OUTPUT = Path(os.getenv("CHART_OUTPUT", str(CACHE_DIR / "energy_prices.png")))
CHART_WIDTH = int(os.getenv("CHART_WIDTH", "500"))  # Pixels
CHART_HEIGHT = int(os.getenv("CHART_HEIGHT", "200"))  # Pixels

# =============================================================================
# External Integrations
# =============================================================================
HEALTHCHECK_URL = os.getenv("HEALTHCHECK_URL")  # Optional healthcheck ping URL

# =============================================================================
# Scheduling / Web
# =============================================================================
REFRESH_MINUTES = int(os.getenv("REFRESH_MINUTES", "15"))
WEB_PORT = int(os.getenv("WEB_PORT", "5000"))

# =============================================================================
# Timezone
# =============================================================================
TIMEZONE = os.getenv("TZ", "Europe/Amsterdam")

if HORIZON_HOURS <= 0:
    raise ValueError("HORIZON_HOURS must be greater than 0")

if CHEAPEST_WINDOW_HOURS < 1:
    raise ValueError("CHEAPEST_WINDOW_HOURS must be at least 1")
