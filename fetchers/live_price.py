"""Priority-ordered live price lookup with per-endpoint retries.

Endpoints are tried one at a time. Each gets ``max_attempts`` GETs with a
``retry_delay * attempt`` pause after every failed attempt but the last, and a
fixed ``endpoint_gap`` pause separates consecutive endpoints. The first in-band
price wins. When every endpoint fails the caller falls back to the last entry
of the historical daily price series.
"""
from __future__ import annotations

import logging
import time
from typing import Mapping, Sequence

from models import DailyPrice, EndpointConfig

from .common import DEFAULT_TIMEOUT_SECONDS, FetchError, fetch_json, utc_now_iso
from .endpoints import MissingApiKeyError, build_endpoint_url, select_endpoints
from .history import last_known_price
from .json_path import extract_price, extract_timestamp
from .static_data import StaticDataSource
from .types import PriceSample

PRICE_BOUNDS = (10.0, 200.0)
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 0.5
ENDPOINT_GAP_SECONDS = 1.0

logger = logging.getLogger(__name__)


class InvalidPriceError(Exception):
    pass


def is_valid_price(price: float | None) -> bool:
    if price is None:
        return False
    lower, upper = PRICE_BOUNDS
    return lower <= price <= upper


def fetch_endpoint_price(
    endpoint: EndpointConfig,
    query: Mapping[str, str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> PriceSample:
    """Single attempt against one endpoint; raises on any failure."""
    url = build_endpoint_url(endpoint, query)
    data = fetch_json(url, timeout=timeout, headers=endpoint.headers)
    price = extract_price(data, endpoint)
    if not is_valid_price(price):
        raise InvalidPriceError(f"Invalid price: {price}")

    return PriceSample(
        price=price,
        source=endpoint.name,
        timestamp=extract_timestamp(data, endpoint) or utc_now_iso(),
        is_live=True,
    )


def try_endpoint(
    endpoint: EndpointConfig,
    query: Mapping[str, str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_attempts: int = MAX_ATTEMPTS,
    retry_delay: float = RETRY_DELAY_SECONDS,
) -> PriceSample | None:
    for attempt in range(1, max_attempts + 1):
        try:
            return fetch_endpoint_price(endpoint, query, timeout=timeout)
        except (FetchError, MissingApiKeyError, InvalidPriceError) as err:
            logger.warning("%s attempt %s/%s failed: %s", endpoint.name, attempt, max_attempts, err)
            if attempt < max_attempts:
                time.sleep(retry_delay * attempt)
    return None


def try_all_endpoints(
    endpoints: Sequence[EndpointConfig],
    query: Mapping[str, str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_attempts: int = MAX_ATTEMPTS,
    retry_delay: float = RETRY_DELAY_SECONDS,
    endpoint_gap: float = ENDPOINT_GAP_SECONDS,
) -> PriceSample | None:
    logger.info("Trying %s endpoints...", len(endpoints))
    for index, endpoint in enumerate(endpoints):
        logger.info("Endpoint %s/%s: %s...", index + 1, len(endpoints), endpoint.name)
        sample = try_endpoint(
            endpoint,
            query,
            timeout=timeout,
            max_attempts=max_attempts,
            retry_delay=retry_delay,
        )
        if sample is not None:
            logger.info("SUCCESS: %s - $%.2f", endpoint.name, sample.price)
            return sample

        logger.warning("%s failed after %s attempts", endpoint.name, max_attempts)
        if index < len(endpoints) - 1:
            time.sleep(endpoint_gap)
    return None


def get_current_price(
    source: StaticDataSource,
    query: Mapping[str, str],
    daily_prices: Sequence[DailyPrice] | None = None,
    max_attempts: int = MAX_ATTEMPTS,
    retry_delay: float = RETRY_DELAY_SECONDS,
    endpoint_gap: float = ENDPOINT_GAP_SECONDS,
) -> PriceSample | None:
    endpoints = select_endpoints(source.load_endpoint_documents(), query)
    sample = try_all_endpoints(
        endpoints,
        query,
        timeout=source.timeout,
        max_attempts=max_attempts,
        retry_delay=retry_delay,
        endpoint_gap=endpoint_gap,
    )
    if sample is not None:
        return sample

    logger.info("Trying last known price...")
    if daily_prices is None:
        daily_prices = source.load_daily_prices(retries=2)
    return last_known_price(daily_prices)
