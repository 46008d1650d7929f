from .common import FetchError, fetch_json, fetch_url
from .endpoints import FALLBACK_ENDPOINT, build_endpoint_url, is_endpoint_available, select_endpoints
from .history import filter_daily_prices, last_known_price
from .json_path import extract_price, parse_json_path
from .live_price import PRICE_BOUNDS, get_current_price, try_all_endpoints, try_endpoint
from .static_data import StaticDataSource
from .types import PriceSample

__all__ = [
    "FALLBACK_ENDPOINT",
    "FetchError",
    "PRICE_BOUNDS",
    "PriceSample",
    "StaticDataSource",
    "build_endpoint_url",
    "extract_price",
    "fetch_json",
    "fetch_url",
    "filter_daily_prices",
    "get_current_price",
    "is_endpoint_available",
    "last_known_price",
    "parse_json_path",
    "select_endpoints",
    "try_all_endpoints",
    "try_endpoint",
]
