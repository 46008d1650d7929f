"""Loader for the static JSON documents behind the gift page.

The documents live either in a local directory or under an ``http(s)://`` base
URL serving the same files:

- ``apis.json``: list of endpoint configurations
- ``recipients.json``: map of recipient id to recipient record
- ``daily-prices.json``: historical daily prices, oldest first
"""
from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

from pydantic import ValidationError

from models import DailyPrice, RecipientRecord

from .common import DEFAULT_TIMEOUT_SECONDS, FetchError, fetch_json

APIS_DOCUMENT = "apis.json"
RECIPIENTS_DOCUMENT = "recipients.json"
DAILY_PRICES_DOCUMENT = "daily-prices.json"

logger = logging.getLogger(__name__)


def _is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


class StaticDataSource:
    def __init__(
        self,
        location: str | Path = "data",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = 3,
        retry_delay: float = 0.5,
    ) -> None:
        self.location = str(location)
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    def _read(self, name: str) -> Any:
        if _is_remote(self.location):
            base = self.location if self.location.endswith("/") else f"{self.location}/"
            return fetch_json(urljoin(base, name), timeout=self.timeout)

        path = Path(self.location) / name
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as err:
            raise FetchError(f"Cannot read {path}: {err}") from err
        except json.JSONDecodeError as err:
            raise FetchError(f"Invalid JSON in {path}: {err}") from err
        if payload is None:
            raise FetchError(f"Empty JSON document in {path}")
        return payload

    def load_with_fallback(self, name: str, fallback: Any, retries: int | None = None) -> Any:
        attempts = self.max_retries if retries is None else retries
        for attempt in range(1, attempts + 1):
            try:
                return self._read(name)
            except FetchError as err:
                logger.warning("Attempt %s/%s failed for %s: %s", attempt, attempts, name, err)
                if attempt == attempts:
                    logger.error("All attempts failed for %s, using fallback", name)
                    break
                time.sleep(self.retry_delay * attempt)
        return fallback

    def load_endpoint_documents(self) -> Any:
        return self.load_with_fallback(APIS_DOCUMENT, None, retries=2)

    def load_recipients(self) -> dict[str, RecipientRecord]:
        payload = self.load_with_fallback(RECIPIENTS_DOCUMENT, {})
        if not isinstance(payload, dict):
            logger.warning("%s is not an object, ignoring it", RECIPIENTS_DOCUMENT)
            return {}

        recipients: dict[str, RecipientRecord] = {}
        for recipient_id, raw in payload.items():
            try:
                recipients[str(recipient_id)] = RecipientRecord.model_validate(raw)
            except ValidationError as err:
                logger.warning("Skipping recipient %r: %s", recipient_id, err)
        return recipients

    def load_daily_prices(self, retries: int | None = None) -> list[DailyPrice]:
        payload = self.load_with_fallback(DAILY_PRICES_DOCUMENT, [], retries=retries)
        if not isinstance(payload, list):
            logger.warning("%s is not a list, ignoring it", DAILY_PRICES_DOCUMENT)
            return []

        prices: list[DailyPrice] = []
        for raw in payload:
            try:
                prices.append(DailyPrice.model_validate(raw))
            except ValidationError as err:
                logger.warning("Skipping daily price %r: %s", raw, err)
        return prices
