"""Dotted-path lookups into decoded price API responses."""
from __future__ import annotations

import logging
import math
from typing import Any

from models import EndpointConfig

logger = logging.getLogger(__name__)

# Known response shapes whose keys contain dots or spaces.
COMPLEX_PATHS: dict[str, list[str]] = {
    "Global Quote.05. price": ["Global Quote", "05. price"],
    "Global Quote.07. latest trading day": ["Global Quote", "07. latest trading day"],
    "rates.XAG": ["rates", "XAG"],
    "rates.USDXAG": ["rates", "USDXAG"],
}

GLOBAL_QUOTE_PREFIX = "Global Quote."


def parse_json_path(path: str) -> list[str]:
    if path in COMPLEX_PATHS:
        return list(COMPLEX_PATHS[path])

    if GLOBAL_QUOTE_PREFIX in path:
        parts = path.split(GLOBAL_QUOTE_PREFIX)
        if len(parts) == 2:
            return ["Global Quote", parts[1]]

    return path.split(".")


def resolve_path(data: Any, path: str) -> Any | None:
    value = data
    for key in parse_json_path(path):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            logger.debug("Path segment %r not found while resolving %r", key, path)
            return None
    return value


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def extract_price(data: Any, endpoint: EndpointConfig) -> float | None:
    price = _to_float(resolve_path(data, endpoint.price_path))
    if price is None:
        return None

    if endpoint.rate_conversion == "invert":
        if price == 0:
            return None
        price = 1 / price

    return price


def extract_timestamp(data: Any, endpoint: EndpointConfig) -> str | None:
    if not endpoint.time_path:
        return None
    value = resolve_path(data, endpoint.time_path)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
