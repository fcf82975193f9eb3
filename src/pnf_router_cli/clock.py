"""The simulated device clock used by `clock set`, `show clock` and `show uptime`."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from .program_exceptions import CommandError

MONTHS: Tuple[str, ...] = tuple(calendar.month_name)[1:]
MIN_YEAR = 1993
MAX_YEAR = 2035


@dataclass
class Clock:
    """Device clock with an optional operator-set time.

    When the time has been set with `clock set`, `current()` returns that
    time advanced by however long it has been since it was set.
    """

    device_model: str = "PNF"
    now: Callable[[], datetime] = datetime.now
    start_time: datetime = field(init=False)
    _custom: Optional[datetime] = field(default=None, init=False)
    _set_at: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.start_time = self.now()

    def set_time(self, time: str, day: int, month: str, year: int) -> datetime:
        """Validate and apply a new clock value.

        Raises:
            CommandError: if any field is out of range.
        """
        hours, minutes, seconds = _parse_time(time)
        if month not in MONTHS:
            raise CommandError("Invalid month. Expected a valid month name.")
        month_number = MONTHS.index(month) + 1
        max_days = calendar.monthrange(year, month_number)[1]
        if not 1 <= day <= max_days:
            raise CommandError(f"Invalid day {day} for month {month}")

        self._custom = datetime(year, month_number, day, hours, minutes, seconds)
        self._set_at = self.now()
        return self._custom

    def current(self) -> datetime:
        if self._custom is None or self._set_at is None:
            return self.now()
        return self._custom + (self.now() - self._set_at)

    def uptime(self) -> timedelta:
        return self.now() - self.start_time

    def format_uptime(self) -> str:
        total = int(self.uptime().total_seconds())
        hours, rest = divmod(total, 3600)
        minutes, seconds = divmod(rest, 60)
        return (
            f"{self.device_model} uptime is {hours} hours, "
            f"{minutes} minutes, {seconds} seconds"
        )

    def format_clock(self) -> str:
        return f"Current clock: {self.current():%d %B %Y %H:%M:%S}"


def _parse_time(time: str) -> Tuple[int, int, int]:
    parts = time.split(":")
    if len(parts) != 3:
        raise CommandError("Invalid time format. Expected hh:mm:ss.")
    try:
        hours, minutes, seconds = (int(p) for p in parts)
    except ValueError:
        raise CommandError("Invalid time format. Expected hh:mm:ss.") from None
    if not (0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60):
        raise CommandError("Invalid time values")
    return hours, minutes, seconds


def parse_clock_set(args: List[str]) -> Tuple[str, int, str, int]:
    """Parse the words after `clock`: ``set hh:mm:ss day Month year``."""
    if len(args) < 5 or args[0] != "set":
        raise CommandError(
            "Incomplete command. Usage: clock set <hh:mm:ss> <day> <month> <year>"
        )
    time, day_text, month, year_text = args[1:5]
    _parse_time(time)

    try:
        day = int(day_text)
    except ValueError:
        day = 0
    if not 1 <= day <= 31:
        raise CommandError("Invalid day. Expected a number between 1 and 31.")

    if month not in MONTHS:
        raise CommandError("Invalid month. Expected a valid month name.")

    try:
        year = int(year_text)
    except ValueError:
        year = 0
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise CommandError(
            f"Invalid year. Expected a number between {MIN_YEAR} and {MAX_YEAR}."
        )
    return time, day, month, year
