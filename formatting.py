from __future__ import annotations

from datetime import date, datetime, timezone

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def ordinal_suffix(num: int) -> str:
    if 11 <= num % 100 <= 13:
        return f"{num}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")
    return f"{num}{suffix}"


def parse_iso_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        stamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def format_british_date(value: date | str) -> str:
    """Format a date as e.g. ``25th Dec, 2025``; unparseable strings pass through."""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    return f"{ordinal_suffix(value.day)} {MONTHS[value.month - 1]}, {value.year}"


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def time_ago(timestamp: str | None, now: datetime | None = None) -> str:
    if not timestamp:
        return "unknown time"
    then = parse_iso_datetime(timestamp)
    if then is None:
        return "unknown time"
    if now is None:
        now = datetime.now(timezone.utc)

    diff_seconds = (now - then).total_seconds()
    if diff_seconds < 0:
        return "recently"

    minutes = int(diff_seconds // 60)
    hours = int(diff_seconds // 3600)
    days = int(diff_seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{_plural(minutes, 'minute')} ago"
    if hours < 24:
        return f"{_plural(hours, 'hour')} ago"
    if days < 7:
        return f"{_plural(days, 'day')} ago"
    if days < 30:
        return f"{_plural(days // 7, 'week')} ago"
    if days < 365:
        return f"{_plural(days // 30, 'month')} ago"
    return f"{_plural(days // 365, 'year')} ago"


def time_difference(gift_date: date, today: date | None = None) -> str:
    """Describe how long ago the gift was given, in years and days."""
    if today is None:
        today = date.today()
    diff_days = abs((today - gift_date).days)
    years, remaining_days = divmod(diff_days, 365)

    if years > 0 and remaining_days > 0:
        return f"{_plural(years, 'year')}, {_plural(remaining_days, 'day')} ago"
    if years > 0:
        return f"{_plural(years, 'year')} ago"
    if remaining_days > 0:
        return f"{_plural(remaining_days, 'day')} ago"
    return "today"
