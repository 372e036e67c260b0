# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, tzinfo
from typing import Any, Callable, List, Optional, Sequence, Union

import pytz

WEEKDAY_HEADERS = ["S", "M", "T", "W", "T", "F", "S"]


@dataclass(frozen=True)
class DayCell:
    day: int
    record: Optional[Any] = None

    @property
    def marked(self) -> bool:
        return self.record is not None


def _default_date_of(record) -> Optional[datetime]:
    return getattr(record, "timestamp", None)


class CalendarView:
    """
    Month grid over timestamped records, with Sunday as the first column.
    Each day shows at most one record: the first one in the given order
    whose local date falls on that day.
    """

    def __init__(
        self,
        records: Sequence[Any],
        year: int,
        month: int,
        tz: Union[str, tzinfo] = "UTC",
        date_of: Callable[[Any], Optional[datetime]] = _default_date_of,
    ):
        self.records = list(records)
        self.year = year
        self.month = month
        self.tz = pytz.timezone(tz) if isinstance(tz, str) else tz
        self._date_of = date_of

    @classmethod
    def current(cls, records: Sequence[Any], tz: Union[str, tzinfo] = "UTC", **kwargs) -> "CalendarView":
        zone = pytz.timezone(tz) if isinstance(tz, str) else tz
        today = datetime.now(zone)
        return cls(records, today.year, today.month, tz=zone, **kwargs)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def first_weekday(self) -> int:
        # date.weekday() is Monday=0; shift to Sunday=0
        return (date(self.year, self.month, 1).weekday() + 1) % 7

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def local_date(self, record) -> Optional[date]:
        stamp = self._date_of(record)
        if stamp is None:
            return None
        if stamp.tzinfo is None:
            stamp = pytz.utc.localize(stamp)
        return stamp.astimezone(self.tz).date()

    def record_for(self, day: int) -> Optional[Any]:
        target = date(self.year, self.month, day)
        for record in self.records:
            if self.local_date(record) == target:
                return record
        return None

    def cells(self) -> List[Optional[DayCell]]:
        blanks: List[Optional[DayCell]] = [None] * self.first_weekday
        days = [DayCell(day, self.record_for(day)) for day in range(1, self.days_in_month + 1)]
        return blanks + days

    def select(self, day: int) -> Optional[Any]:
        """Opening a day only works when it has a record."""
        if not 1 <= day <= self.days_in_month:
            return None
        return self.record_for(day)

    def shift(self, offset: int):
        index = self.year * 12 + (self.month - 1) + offset
        # date() only covers years MINYEAR..MAXYEAR
        index = min(max(index, MINYEAR * 12), MAXYEAR * 12 + 11)
        self.year, self.month = divmod(index, 12)
        self.month += 1

    def previous_month(self):
        self.shift(-1)

    def next_month(self):
        self.shift(1)

    def as_payload(self, serialize: Callable[[Any], dict]) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "weekdays": WEEKDAY_HEADERS,
            "leading_blanks": self.first_weekday,
            "days": [
                {"day": cell.day, "marked": cell.marked, "record": serialize(cell.record) if cell.marked else None}
                for cell in self.cells()[self.first_weekday:]
            ],
        }
