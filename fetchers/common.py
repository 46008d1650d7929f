from __future__ import annotations

import json
import urllib.request
from datetime import datetime, timezone
from typing import Any, Mapping

DEFAULT_TIMEOUT_SECONDS = 5
USER_AGENT = "SilverGiftTracker/1.0 (+https://github.com/)"


class FetchError(Exception):
    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().replace(microsecond=0).isoformat()


def fetch_url(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    headers: Mapping[str, str] | None = None,
) -> str:
    """Single GET of ``url``; any failure surfaces as ``FetchError``.

    Callers own the retry policy. Non-2xx responses count as failures.
    """
    request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    request_headers.update(headers or {})

    try:
        req = urllib.request.Request(url, headers=request_headers)
        with urllib.request.urlopen(req, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if status is not None and not 200 <= status < 300:
                raise FetchError(f"HTTP {status}")
            return response.read().decode("utf-8", errors="ignore")
    except FetchError as err:
        raise FetchError(f"Failed to fetch URL: {url}: {err}") from err
    except Exception as err:
        raise FetchError(f"Failed to fetch URL: {url}: {err!r}") from err


def fetch_json(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    headers: Mapping[str, str] | None = None,
) -> Any:
    text = fetch_url(url, timeout=timeout, headers=headers)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FetchError(f"Invalid JSON from {url}: {exc}") from exc
    if payload is None:
        raise FetchError(f"Empty JSON document from {url}")
    return payload
