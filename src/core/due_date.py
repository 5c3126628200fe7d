"""Due-date resolution (core domain).

A run computes one ``YYYY-MM-DD`` bound from the configured keyword or day
offset and the reference time handed in by the caller.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Union

from core.errors import DueDateInvalidError

DATE_FORMAT = "%Y-%m-%d"

WEEKEND = "weekend"
END_OF_MONTH = "end_of_month"

_RELATIVE_DAYS = re.compile(r"[+-]?[0-9]+")

# Weekdays are counted from Sunday=0, so Friday is 5.
_FRIDAY = 5

DateLike = Union[date, datetime]


def _sunday_based_weekday(value: DateLike) -> int:
    return value.isoweekday() % 7


def week_end(reference: DateLike) -> date:
    """Return the coming Friday, or the reference day itself on Friday/Saturday."""

    day = _as_date(reference)
    weekday = _sunday_based_weekday(day)
    if weekday >= _FRIDAY:
        return day
    return day + timedelta(days=_FRIDAY - weekday)


def end_of_month(reference: DateLike) -> date:
    """Return the last calendar day of the reference month."""

    day = _as_date(reference)
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last_day)


def resolve_due_date(spec: str, reference: DateLike) -> str:
    """Resolve a due-date spec to a ``YYYY-MM-DD`` string.

    Accepted specs:
    - ``"weekend"``: see :func:`week_end`
    - ``"end_of_month"``: see :func:`end_of_month`
    - a signed whole number of days relative to ``reference``
    """

    if spec == WEEKEND:
        return week_end(reference).strftime(DATE_FORMAT)
    if spec == END_OF_MONTH:
        return end_of_month(reference).strftime(DATE_FORMAT)
    if not _RELATIVE_DAYS.fullmatch(spec or ""):
        raise DueDateInvalidError()
    try:
        return (reference + timedelta(days=int(spec))).strftime(DATE_FORMAT)
    except (OverflowError, ValueError) as e:
        # Offsets past the supported calendar range.
        raise DueDateInvalidError() from e


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
