"""Parser for AMAZON.DATE slot values."""

import calendar
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta

from red_zone.domain.errors import DateFormatError
from red_zone.domain.zones import DateWindow
from red_zone.services.zones import DatePhraseParser

_DAY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_WEEK = re.compile(r"^(\d{4})-W(\d{1,2})$")
_WEEKEND = re.compile(r"^(\d{4})-W(\d{1,2})-WE$")
_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_YEAR = re.compile(r"^(\d{4})$")
_SEASON = re.compile(r"^(\d{4})-(WI|SP|SU|FA)$")
_DECADE = re.compile(r"^(\d{3})X$")

# Season -> (start month, end month); winter runs into the next year.
_SEASONS = {
    "SP": (3, 5),
    "SU": (6, 8),
    "FA": (9, 11),
    "WI": (12, 2),
}


def _month_window(year: int, month: int) -> DateWindow:
    last_day = calendar.monthrange(year, month)[1]
    return DateWindow(date(year, month, 1), date(year, month, last_day))


@dataclass
class AmazonDateParser(DatePhraseParser):
    """Resolves AMAZON.DATE values such as ``2024-W05`` into windows."""

    today: Callable[[], date] = field(default=date.today)

    def parse(self, phrase: str) -> DateWindow:  # noqa: PLR0911
        """Return the window an AMAZON.DATE value covers."""
        value = phrase.strip().upper()
        try:
            if value == "PRESENT_REF":
                current = self.today()
                return DateWindow(current, current)
            if match := _DAY.match(value):
                day = date(*(int(part) for part in match.groups()))
                return DateWindow(day, day)
            if match := _WEEKEND.match(value):
                year, week = int(match[1]), int(match[2])
                return DateWindow(
                    date.fromisocalendar(year, week, 6),
                    date.fromisocalendar(year, week, 7),
                )
            if match := _WEEK.match(value):
                year, week = int(match[1]), int(match[2])
                start = date.fromisocalendar(year, week, 1)
                return DateWindow(start, start + timedelta(days=6))
            if match := _SEASON.match(value):
                return self._season(int(match[1]), match[2])
            if match := _MONTH.match(value):
                return _month_window(int(match[1]), int(match[2]))
            if match := _YEAR.match(value):
                year = int(match[1])
                return DateWindow(date(year, 1, 1), date(year, 12, 31))
            if match := _DECADE.match(value):
                start_year = int(match[1]) * 10
                return DateWindow(date(start_year, 1, 1), date(start_year + 9, 12, 31))
        except ValueError as exc:
            raise DateFormatError(phrase) from exc
        raise DateFormatError(phrase)

    @staticmethod
    def _season(year: int, code: str) -> DateWindow:
        start_month, end_month = _SEASONS[code]
        end_year = year + 1 if end_month < start_month else year
        return DateWindow(
            date(year, start_month, 1),
            _month_window(end_year, end_month).end_date,
        )
