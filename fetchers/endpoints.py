from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

from pydantic import ValidationError

from models import EndpointConfig

logger = logging.getLogger(__name__)

FALLBACK_ENDPOINT = EndpointConfig(
    name="gold-api",
    url="https://api.gold-api.com/price/XAG",
    price_path="price",
    time_path="updatedAt",
    authentication="none",
    priority=1,
    description="Fallback API configuration",
)


class MissingApiKeyError(Exception):
    pass


def fallback_endpoints() -> list[EndpointConfig]:
    return [FALLBACK_ENDPOINT]


def is_endpoint_available(endpoint: EndpointConfig, query: Mapping[str, str]) -> bool:
    if not endpoint.requires_auth:
        return True
    has_key = bool(query.get(endpoint.authentication))
    if not has_key:
        logger.info("Skipping %s - requires %s key", endpoint.name, endpoint.authentication)
    return has_key


def select_endpoints(payload: Any, query: Mapping[str, str]) -> list[EndpointConfig]:
    """Validate, sort by priority and filter the configured endpoints.

    Falls back to the built-in endpoint when the document is unusable or no
    configured endpoint can be called with the given query string.
    """
    if not isinstance(payload, list):
        logger.warning("Endpoint config invalid, using fallback")
        return fallback_endpoints()

    endpoints: list[EndpointConfig] = []
    for raw in payload:
        try:
            endpoints.append(EndpointConfig.model_validate(raw))
        except ValidationError as err:
            logger.warning("Skipping invalid endpoint config %r: %s", raw, err)

    endpoints.sort(key=lambda endpoint: endpoint.priority)
    available = [endpoint for endpoint in endpoints if is_endpoint_available(endpoint, query)]
    logger.info("Loaded %s available endpoints: %s", len(available), [e.name for e in available])
    return available or fallback_endpoints()


def build_endpoint_url(endpoint: EndpointConfig, query: Mapping[str, str]) -> str:
    if not endpoint.requires_auth:
        return endpoint.url

    api_key = query.get(endpoint.authentication)
    if not api_key:
        raise MissingApiKeyError(f"Missing API key for {endpoint.name}: {endpoint.authentication}")
    return endpoint.url.replace(f"{{{endpoint.authentication}}}", quote(api_key, safe=""))
