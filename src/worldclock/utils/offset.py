"""UTC offset inference from a city's relative local time.

World clock pages only show each city's weekday and wall-clock time
("Thu 9:00 pm"). Comparing that with the current UTC instant is enough to
recover the city's UTC offset, including half- and quarter-hour offsets and
cities that are already a calendar day ahead of or behind UTC.
"""

import re
from datetime import UTC, datetime, timedelta

# Python weekday numbering: Monday == 0
WEEKDAYS = {
    "MON": 0,
    "TUE": 1,
    "WED": 2,
    "THU": 3,
    "FRI": 4,
    "SAT": 5,
    "SUN": 6,
}
DEFAULT_WEEKDAY = WEEKDAYS["SUN"]

ZERO_OFFSET = timedelta(0)

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def parse_weekday(text: str) -> int:
    """Map a three-letter weekday ("Thu", "thu") to 0-6; anything else maps to Sunday."""
    return WEEKDAYS.get(text.strip().upper(), DEFAULT_WEEKDAY)


def parse_city_time(text: str) -> tuple[int, int, int] | None:
    """
    Parse a relative city time into (weekday, hour, minute).

    Handles "Thu 9:00 pm", "Sun 12:04 am" (-> 00:04) and 24-hour strings
    without a period ("Fri 21:05"). Dots are expected to be stripped already,
    so "p.m." arrives as "pm".

    Returns:
        Tuple of weekday (Monday == 0), hour (0-23) and minute (0-59),
        or None if the text cannot be parsed
    """
    parts = text.split()
    if len(parts) < 2:
        return None

    weekday = parse_weekday(parts[0])

    m = _TIME_PATTERN.match(parts[1])
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))

    if len(parts) > 2:
        period = parts[2].upper()
        if period not in ("AM", "PM"):
            return None
        # 12:04 am has to become 00:04
        hour %= 12
        if period == "PM":
            hour += 12

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return weekday, hour, minute


def city_utc_offset(
    city_weekday: int,
    city_hour: int,
    city_minute: int,
    utc_time: datetime,
) -> timedelta:
    """
    Infer a city's UTC offset from its local weekday, hour and minute.

    Args:
        city_weekday: City weekday, Monday == 0
        city_hour: City hour, 0-23
        city_minute: City minute, 0-59
        utc_time: The current instant; converted to UTC if timezone-aware,
            assumed UTC if naive

    Returns:
        Signed offset (negative is west of UTC) with minute precision
    """
    if utc_time.tzinfo is not None:
        utc_time = utc_time.astimezone(UTC)
    utc_weekday = utc_time.weekday()

    if city_weekday == utc_weekday:
        h = city_hour - utc_time.hour
        m = city_minute - utc_time.minute
        if h < 0 and m > 0:
            h += 1
            m = 60 - m
            return -timedelta(hours=abs(h), minutes=m)
        if h == 0 and m < 0:
            # Zero hours but still west: "-00:45", never "+00:45"
            return -timedelta(minutes=abs(m))
        return timedelta(hours=h, minutes=m)

    if (city_weekday + 1) % 7 == utc_weekday:
        # The city is still on the previous calendar day
        h = utc_time.hour + 24 - city_hour
        m = city_minute - utc_time.minute
        if m > 0:
            h -= 1
            m = 60 - m
        elif m < 0:
            m = -m
        return -timedelta(hours=h, minutes=abs(m))

    # The city is already on the next calendar day
    h = city_hour + 24 - utc_time.hour
    m = city_minute - utc_time.minute
    if m < 0:
        h -= 1
        m += 60
    return timedelta(hours=h, minutes=abs(m))


def format_offset(offset: timedelta) -> str:
    """Format an offset as "+HH:MM" / "-HH:MM"; a zero offset is "+00:00"."""
    sign = "-" if offset < ZERO_OFFSET else "+"
    hours, minutes = divmod(int(abs(offset).total_seconds()) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def parse_offset(text: str) -> timedelta:
    """
    Parse "+HH:MM", "-HH:MM" or "+HHMM" back into a timedelta.

    Raises:
        ValueError: If the text is not an offset string
    """
    m = _OFFSET_PATTERN.match(text.strip())
    if not m:
        raise ValueError(f"Not a valid UTC offset string: {text!r}")
    offset = timedelta(hours=int(m.group(2)), minutes=int(m.group(3)))
    return -offset if m.group(1) == "-" else offset
