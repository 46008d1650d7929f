from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta, timezone

from formatting import format_british_date, format_currency, ordinal_suffix, time_ago, time_difference

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


class TimeDifferenceTests(unittest.TestCase):
    def test_exactly_365_days_reads_one_year(self) -> None:
        today = date(2026, 10, 19)
        self.assertEqual("1 year ago", time_difference(today - timedelta(days=365), today=today))

    def test_years_and_days(self) -> None:
        today = date(2026, 10, 19)
        self.assertEqual("2 years, 1 day ago", time_difference(today - timedelta(days=731), today=today))
        self.assertEqual("1 year, 30 days ago", time_difference(today - timedelta(days=395), today=today))

    def test_days_and_today(self) -> None:
        today = date(2026, 10, 19)
        self.assertEqual("1 day ago", time_difference(today - timedelta(days=1), today=today))
        self.assertEqual("45 days ago", time_difference(today - timedelta(days=45), today=today))
        self.assertEqual("today", time_difference(today, today=today))

    def test_future_date_uses_absolute_difference(self) -> None:
        today = date(2026, 10, 19)
        self.assertEqual("3 days ago", time_difference(today + timedelta(days=3), today=today))


class TimeAgoTests(unittest.TestCase):
    def test_buckets(self) -> None:
        cases = {
            NOW - timedelta(seconds=20): "just now",
            NOW - timedelta(minutes=1): "1 minute ago",
            NOW - timedelta(minutes=59): "59 minutes ago",
            NOW - timedelta(hours=5): "5 hours ago",
            NOW - timedelta(days=6): "6 days ago",
            NOW - timedelta(days=14): "2 weeks ago",
            NOW - timedelta(days=65): "2 months ago",
            NOW - timedelta(days=800): "2 years ago",
        }
        for stamp, expected in cases.items():
            self.assertEqual(expected, time_ago(stamp.isoformat(), now=NOW))

    def test_z_suffix_and_future(self) -> None:
        self.assertEqual("3 hours ago", time_ago("2026-10-19T12:00:00Z", now=NOW))
        self.assertEqual("recently", time_ago("2026-10-20T12:00:00Z", now=NOW))

    def test_unknown(self) -> None:
        self.assertEqual("unknown time", time_ago(None, now=NOW))
        self.assertEqual("unknown time", time_ago("yesterday", now=NOW))


class FormatTests(unittest.TestCase):
    def test_ordinals(self) -> None:
        self.assertEqual(
            ["1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "111th"],
            [ordinal_suffix(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 111)],
        )

    def test_british_date(self) -> None:
        self.assertEqual("25th Dec, 2025", format_british_date(date(2025, 12, 25)))
        self.assertEqual("2nd Mar, 2024", format_british_date("2024-03-02"))
        self.assertEqual("someday", format_british_date("someday"))

    def test_currency(self) -> None:
        self.assertEqual("$1,234.50", format_currency(1234.5))
        self.assertEqual("$49.03", format_currency(49.03))
        self.assertEqual("-$2.00", format_currency(-2))


if __name__ == "__main__":
    unittest.main()
