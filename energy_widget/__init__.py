"""
Energy Prices Widget: cheapest upcoming electricity window at a glance.
"""
from .models import PriceSample, CheapestWindow, Summary, InsufficientData
from .price_logic import filter_forward, find_cheapest_window
from .cache import FileStorage, PriceCache, StorageHandle
from .summary import build_summary
from .price_client import NetworkError, PriceApiError, fetch_market_prices, parse_price_samples
from .widget import WidgetResult, analyze, refresh, run_widget
