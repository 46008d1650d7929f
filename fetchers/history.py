from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from models import DailyPrice

from .types import PriceSample

HISTORICAL_SOURCE = "historical"

logger = logging.getLogger(__name__)


def last_known_price(daily_prices: Sequence[DailyPrice]) -> PriceSample | None:
    if not daily_prices:
        logger.warning("No historical prices available")
        return None

    last = daily_prices[-1]
    logger.info("Found last known price: $%s from %s", last.price, last.date.isoformat())
    return PriceSample(
        price=last.price,
        source=last.source or HISTORICAL_SOURCE,
        timestamp=f"{last.date.isoformat()}T12:00:00Z",
        is_live=False,
        is_last_known=True,
    )


def filter_daily_prices(
    daily_prices: Sequence[DailyPrice],
    start: date | None = None,
    end: date | None = None,
) -> list[DailyPrice]:
    items: list[DailyPrice] = []
    for entry in daily_prices:
        if start and entry.date < start:
            continue
        if end and entry.date > end:
            continue
        items.append(entry)
    return items
