# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timezone
from types import SimpleNamespace

from horizon.services.calendar_view import WEEKDAY_HEADERS, CalendarView


def record(*args, name=""):
    return SimpleNamespace(name=name, timestamp=datetime(*args, tzinfo=timezone.utc))


def test_month_layout_starts_on_sunday():
    september = CalendarView([], 2024, 9)
    assert september.first_weekday == 0  # 1 Sep 2024 was a Sunday
    assert september.days_in_month == 30
    assert september.title == "September 2024"

    february = CalendarView([], 2024, 2)
    assert february.first_weekday == 4  # Thursday
    assert february.days_in_month == 29

    cells = february.cells()
    assert cells[:4] == [None] * 4
    assert cells[4].day == 1
    assert len(cells) == 4 + 29


def test_days_are_bucketed_by_local_date():
    late_evening_utc = record(2024, 9, 10, 20, 0)
    view = CalendarView([late_evening_utc], 2024, 9, tz="Asia/Kolkata")

    assert view.record_for(10) is None
    assert view.record_for(11) is late_evening_utc


def test_naive_timestamps_are_treated_as_utc():
    naive = SimpleNamespace(timestamp=datetime(2024, 9, 10, 12, 0))
    assert CalendarView([naive], 2024, 9).record_for(10) is naive


def test_first_record_in_order_wins():
    newer = record(2024, 9, 3, 18, 0, name="newer")
    older = record(2024, 9, 3, 8, 0, name="older")
    view = CalendarView([newer, older], 2024, 9)
    assert view.record_for(3).name == "newer"


def test_records_without_timestamp_are_ignored():
    pending = SimpleNamespace(timestamp=None)
    view = CalendarView([pending], 2024, 9)
    assert not any(cell and cell.marked for cell in view.cells())


def test_select_only_opens_marked_days():
    entry = record(2024, 9, 5, 12, 0)
    view = CalendarView([entry], 2024, 9)
    assert view.select(5) is entry
    assert view.select(6) is None
    assert view.select(31) is None
    assert view.select(0) is None


def test_month_navigation_wraps_years():
    view = CalendarView([], 2024, 1)
    view.previous_month()
    assert (view.year, view.month) == (2023, 12)
    view.next_month()
    view.next_month()
    assert (view.year, view.month) == (2024, 2)

    view = CalendarView([], 2024, 12)
    view.next_month()
    assert (view.year, view.month) == (2025, 1)


def test_payload_shape():
    entry = record(2024, 9, 2, 9, 0)
    payload = CalendarView([entry], 2024, 9).as_payload(lambda r: {"name": r.name})

    assert payload["weekdays"] == WEEKDAY_HEADERS
    assert payload["leading_blanks"] == 0
    assert len(payload["days"]) == 30
    assert payload["days"][1] == {"day": 2, "marked": True, "record": {"name": ""}}
    assert payload["days"][0]["marked"] is False


def test_month_navigation_stops_at_date_range_edges():
    earliest = CalendarView([], 1, 1)
    earliest.previous_month()
    assert (earliest.year, earliest.month) == (1, 1)
    assert earliest.title == "January 1"

    latest = CalendarView([], 9999, 12)
    latest.next_month()
    assert (latest.year, latest.month) == (9999, 12)
    assert latest.days_in_month == 31
