"""Natural-language date parsing for filter values.

Every form is resolved against an explicit ``today`` so results never depend
on the clock at match time.

Supported forms (case-insensitive):
    today, tomorrow, yesterday
    in 3 days, in 1 week, in 2 months
    monday, fri, next tuesday
    next week                  - the coming Monday
    dec 15, december 15        - this year, or next year if already past
    2024-12-15                 - ISO
    12/15, 12/15/2024, 12/15/24
"""

import re
from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

_RELATIVE_DAYS = {"yesterday": -1, "today": 0, "tomorrow": 1}

_WEEKDAYS = {
    "monday": MO,
    "mon": MO,
    "tuesday": TU,
    "tue": TU,
    "tues": TU,
    "wednesday": WE,
    "wed": WE,
    "thursday": TH,
    "thu": TH,
    "thur": TH,
    "thurs": TH,
    "friday": FR,
    "fri": FR,
    "saturday": SA,
    "sat": SA,
    "sunday": SU,
    "sun": SU,
}

_OFFSET_RE = re.compile(r"^in\s+(\d+)\s+(day|week|month)s?$")
_MONTH_DAY_RE = re.compile(r"^([a-z]+)\s+(\d{1,2})$")
_US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{2}|\d{4}))?$")

_PARSER_INFO = dateutil_parser.parserinfo()


def _parse_offset(text: str, today: date) -> date | None:
    match = _OFFSET_RE.match(text)
    if match is None:
        return None
    amount = int(match.group(1))
    unit = match.group(2)
    if unit == "day":
        return today + timedelta(days=amount)
    if unit == "week":
        return today + timedelta(weeks=amount)
    return today + relativedelta(months=amount)


def _parse_weekday(text: str, today: date) -> date | None:
    """Resolve "friday" to the next Friday after today, "next friday" a week later."""
    is_next = text.startswith("next ")
    if is_next:
        text = text[len("next ") :].strip()
    weekday = _WEEKDAYS.get(text)
    if weekday is None:
        return None

    result = today + relativedelta(days=1, weekday=weekday(+1))
    # "next" skips the nearest occurrence unless it is already a week out
    if is_next and (result - today).days < 7:
        result += timedelta(weeks=1)
    return result


def _parse_month_day(text: str, today: date) -> date | None:
    match = _MONTH_DAY_RE.match(text)
    if match is None or _PARSER_INFO.month(match.group(1)) is None:
        return None
    try:
        result = dateutil_parser.parse(
            text, default=datetime(today.year, 1, 1)
        ).date()
    except (ValueError, OverflowError):
        return None
    if result < today:
        result += relativedelta(years=1)
    return result


def _parse_iso(text: str, today: date) -> date | None:
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _parse_us_date(text: str, today: date) -> date | None:
    match = _US_DATE_RE.match(text)
    if match is None:
        return None
    month, day = int(match.group(1)), int(match.group(2))
    year_text = match.group(3)
    try:
        if year_text is None:
            result = date(today.year, month, day)
            if result < today:
                result = date(today.year + 1, month, day)
            return result
        year = int(year_text)
        if year < 100:
            year += 2000
        return date(year, month, day)
    except ValueError:
        return None


def parse_natural_date(text: str, today: date) -> date | None:
    """Parse a natural-language date expression.

    Args:
        text: The expression, e.g. "tomorrow", "next week" or "2024-12-15".
        today: The date relative forms resolve against.

    Returns:
        The resolved date, or None if the text is not a recognized form.

    Examples:
        >>> parse_natural_date("in 3 days", date(2025, 12, 10))
        datetime.date(2025, 12, 13)
        >>> parse_natural_date("next week", date(2025, 12, 10))
        datetime.date(2025, 12, 15)
    """
    text = " ".join(text.strip().lower().split())
    if not text:
        return None

    if text in _RELATIVE_DAYS:
        return today + timedelta(days=_RELATIVE_DAYS[text])

    if text == "next week":
        return today + relativedelta(days=1, weekday=MO(+1))

    for resolve in (
        _parse_offset,
        _parse_weekday,
        _parse_month_day,
        _parse_iso,
        _parse_us_date,
    ):
        result = resolve(text, today)
        if result is not None:
            return result
    return None
