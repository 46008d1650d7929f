from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping

from config import Settings, load_settings
from fetchers import StaticDataSource, get_current_price
from models import GiftView, SelectorView
from render import render_gift_page, render_recipient_selector

RECIPIENT_PARAM = "recipient"

logger = logging.getLogger(__name__)


def data_source_from_settings(settings: Settings) -> StaticDataSource:
    return StaticDataSource(
        location=settings.data_location,
        timeout=settings.api_timeout_seconds,
        max_retries=settings.max_attempts,
        retry_delay=settings.retry_delay_seconds,
    )


def build_page_view(
    query: Mapping[str, str],
    source: StaticDataSource | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> GiftView | SelectorView:
    """Resolve one page view: recipient lookup, price fallback chain, render."""
    if settings is None:
        settings = load_settings()
    if source is None:
        source = data_source_from_settings(settings)

    recipients = source.load_recipients()
    recipient_id = query.get(RECIPIENT_PARAM)
    if not recipient_id or recipient_id not in recipients:
        if recipient_id:
            logger.info("Unknown recipient %r, showing selector", recipient_id)
        return render_recipient_selector(recipients)

    daily_prices = source.load_daily_prices()
    sample = get_current_price(
        source,
        query,
        daily_prices=daily_prices,
        max_attempts=settings.max_attempts,
        retry_delay=settings.retry_delay_seconds,
        endpoint_gap=settings.endpoint_gap_seconds,
    )
    return render_gift_page(recipients[recipient_id], daily_prices, sample, now=now)
