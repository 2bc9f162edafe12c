"""Wall-clock arithmetic and parsing for plan start and end values."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidEndSpecification

MINUTES_PER_DAY = 24 * 60

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """A local wall-clock time with no date attached."""

    hours: int
    minutes: int

    @classmethod
    def from_minutes(cls, total: int) -> "TimeOfDay":
        """Build a time from minutes since midnight, wrapping past 24:00."""
        hours, minutes = divmod(total % MINUTES_PER_DAY, 60)
        return cls(hours, minutes)

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return format_time(self)


class EndKind(Enum):
    TIME = "time"
    COUNT = "count"


@dataclass(frozen=True)
class EndCondition:
    """Either a clock time to stop at or a number of pomodoros to schedule."""

    kind: EndKind
    value: Union[TimeOfDay, int]

    @classmethod
    def at(cls, time: TimeOfDay) -> "EndCondition":
        return cls(EndKind.TIME, time)

    @classmethod
    def count(cls, pomodoros: int) -> "EndCondition":
        if pomodoros < 0:
            raise ValueError("pomodoro count cannot be negative")
        return cls(EndKind.COUNT, pomodoros)


def add_minutes(time: TimeOfDay, minutes: int) -> TimeOfDay:
    # No day count is kept: 23:50 + 20 is 00:10.
    return TimeOfDay.from_minutes(time.total_minutes + minutes)


def format_time(time: TimeOfDay) -> str:
    return f"{time.hours:02d}:{time.minutes:02d}"


def parse_time(text: str) -> TimeOfDay:
    """Parse ``H:MM`` or ``HH:MM``.

    Raises:
        ValueError: if the text is not a time or names an hour above 23
            or a minute above 59.
    """
    match = _HHMM_RE.match(text.strip())
    if not match:
        raise ValueError(f"Invalid HH:MM: {text!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid HH:MM: {text!r}")
    return TimeOfDay(hours, minutes)


def parse_end_spec(text: str) -> EndCondition:
    """Read the end of a plan as a clock time, falling back to a pomodoro count."""
    try:
        return EndCondition.at(parse_time(text))
    except ValueError:
        pass
    try:
        return EndCondition.count(int(text.strip()))
    except ValueError:
        raise InvalidEndSpecification(text) from None
