"""Pure view builders for the gift page.

Nothing here touches the network or the response object: each function takes
loaded records and returns a view model that ``api.html`` (or the JSON routes)
applies.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Mapping, Sequence

from fetchers.types import PriceSample
from formatting import format_british_date, format_currency, time_ago, time_difference
from models import (
    ChartMessage,
    DailyPrice,
    ErrorView,
    GiftView,
    RecipientOption,
    RecipientRecord,
    SelectorView,
    StatusIcon,
)

COMMODITY = "Silver"
SELECTOR_TITLE = f"Select Your {COMMODITY} Gift"
CHART_TITLE = "📈 Price History Chart"
NO_DATA_CHART = ChartMessage(
    title=CHART_TITLE,
    message="No historical price data available yet",
    sub_message=f"Check back in a few days to see your {COMMODITY.lower()}'s price history!",
)
FALLBACK_CHART = ChartMessage(
    title=CHART_TITLE,
    message="Chart temporarily unavailable",
    sub_message=f"Your {COMMODITY.lower()}'s value is still being tracked!",
)
LOAD_ERROR_MESSAGE = f"Unable to load your {COMMODITY.lower()} gift data. Please try refreshing the page."
UNAVAILABLE_NOTES = [
    f"{COMMODITY} price data is temporarily unavailable.",
    f"Your {COMMODITY.lower()} is still valuable - we just can't show the price right now.",
]


def status_icon(sample: PriceSample | None, now: datetime | None = None) -> StatusIcon:
    if sample is None or not sample.price:
        return StatusIcon(level="error", tooltip=["No price data available"])
    if sample.is_live:
        return StatusIcon(level="reliable", tooltip=[f"Live price from {sample.source}"])
    if sample.is_last_known:
        return StatusIcon(
            level="warning",
            tooltip=[
                f"Last known price from {sample.source}",
                f"Updated: {time_ago(sample.timestamp, now=now)}",
            ],
        )
    return StatusIcon(level="warning", tooltip=[f"Cached price from {sample.source}"])


def gift_description(amount: float) -> str:
    if amount == 1:
        return f"1 oz of {COMMODITY}"
    return f"{amount:g} oz of {COMMODITY}"


def change_description(current: float, initial: float) -> str:
    change = round((current - initial) / initial * 100, 1)
    if change >= 0:
        return f"an increase of {abs(change):.1f}%"
    return f"a decrease of {abs(change):.1f}%"


def chart_config(daily_prices: Sequence[DailyPrice], recipient_name: str) -> dict | None:
    """Line chart config in the shape Chart.js expects, or None without data."""
    if not daily_prices:
        return None
    return {
        "type": "line",
        "data": {
            "labels": [entry.date.isoformat() for entry in daily_prices],
            "datasets": [
                {
                    "label": f"{COMMODITY} Price (USD/oz)",
                    "data": [entry.price for entry in daily_prices],
                    "borderColor": "#3498db",
                    "backgroundColor": "rgba(52, 152, 219, 0.1)",
                    "borderWidth": 2,
                    "fill": True,
                    "tension": 0.1,
                }
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {
                "title": {"display": True, "text": f"{COMMODITY} Price History - {recipient_name}'s Gift"},
                "legend": {"display": True},
            },
            "scales": {
                "y": {"beginAtZero": False, "title": {"display": True, "text": "Price (USD/oz)"}},
                "x": {"title": {"display": True, "text": "Date"}},
            },
        },
    }


def render_gift_page(
    recipient: RecipientRecord,
    daily_prices: Sequence[DailyPrice],
    sample: PriceSample | None,
    now: datetime | None = None,
) -> GiftView:
    if now is None:
        now = datetime.now(timezone.utc)
    today: date = now.date()

    time_description = time_difference(recipient.gift_date, today=today)
    description = gift_description(recipient.silver_amount)
    greeting = f"Hello {recipient.recipient_name},"
    gift_line = f"{time_description}, {recipient.giver_name} gave you {description}."

    chart = chart_config(daily_prices, recipient.recipient_name)
    view = {
        "recipient_name": recipient.recipient_name,
        "giver_name": recipient.giver_name,
        "status": status_icon(sample, now=now),
        "time_description": time_description,
        "gift_description": description,
        "chart": chart,
        "chart_message": None if chart else NO_DATA_CHART,
    }

    if sample is None or not sample.price:
        lines = [greeting, gift_line, *UNAVAILABLE_NOTES]
        return GiftView(**view, unavailable_notes=list(UNAVAILABLE_NOTES), content="\n".join(lines))

    price_label = "Last known value" if sample.is_last_known else "Current value"
    total_value = format_currency(sample.price * recipient.silver_amount)
    change = change_description(sample.price, recipient.initial_price)
    change_line = f"That's {change} since {format_british_date(recipient.gift_date)}!"
    spot_price = f"${sample.price:.2f}/oz"
    lines = [
        greeting,
        gift_line,
        f"{price_label} of that {COMMODITY.lower()}: {total_value}",
        change_line,
        f"({COMMODITY} price: {spot_price})",
    ]
    return GiftView(
        **view,
        price_label=price_label,
        total_value=total_value,
        is_last_known=sample.is_last_known,
        change_description=change_line,
        spot_price=spot_price,
        content="\n".join(lines),
    )


def render_recipient_selector(recipients: Mapping[str, RecipientRecord]) -> SelectorView:
    options = [
        RecipientOption(recipient_id=recipient_id, recipient_name=record.recipient_name)
        for recipient_id, record in sorted(recipients.items())
    ]
    return SelectorView(title=SELECTOR_TITLE, options=options)


def render_error(message: str = LOAD_ERROR_MESSAGE) -> ErrorView:
    return ErrorView(title="⚠️ Error", message=message)
