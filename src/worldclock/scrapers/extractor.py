"""City record extraction from a parsed world clock page.

A city is spread over two fragments that share a numeric id::

    <td>
       <a href="/worldclock/new-zealand/auckland">Auckland</a>   <- name and link
       <span id=p26s class=wds> *</span>                          <- id, DST asterisk
    </td>
    <td id=p26 class=rbi>Thu 9:00 p.m.</td>                      <- id, relative time

The tree is walked once in document order, carrying a single pending
record. An anchor fills in the name and link; the first element with a new
id starts a city and the second element with the same id completes it.
"""

import logging
import re
from dataclasses import replace
from datetime import datetime
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, NavigableString, Tag

from worldclock.scrapers.models import CityRecord, CityRecordSet, SortMode
from worldclock.utils.offset import ZERO_OFFSET, city_utc_offset, parse_city_time

logger = logging.getLogger(__name__)

_CITY_ID_PATTERN = re.compile(r"[+-]?\d+")

# The day of the week needs at least three characters
MIN_TIME_STRING_LENGTH = 3


def flat_text(tag: Tag) -> str:
    """Concatenate the direct text children of ``tag`` with dots removed."""
    return "".join(
        str(child).replace(".", "")
        for child in tag.children
        if type(child) is NavigableString
    )


def parse_city_id(value: str | None) -> int | None:
    """Parse "p26" or "p26s" into 26; None if the id carries no number."""
    if not value:
        return None
    candidate = value.lstrip("p").rstrip("s")
    if not _CITY_ID_PATTERN.fullmatch(candidate):
        return None
    return int(candidate)


def page_base_url(page_uri: str) -> str | None:
    """Scheme and host of the page, e.g. "https://www.timeanddate.com"."""
    parts = urlsplit(page_uri)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def resolve_city_url(base_url: str | None, href: str | None) -> str:
    if not base_url or not href:
        return ""
    return urljoin(base_url, href)


def update_offset(record: CityRecord, utc_now: datetime) -> None:
    """Infer the record's UTC offset from its relative time string, if usable."""
    if len(record.raw_time_string) < MIN_TIME_STRING_LENGTH:
        return
    city_time = parse_city_time(record.raw_time_string)
    if city_time is None:
        logger.warning(
            f"Could not parse time string {record.raw_time_string!r} for {record.name!r}"
        )
        return
    record.utc_offset = city_utc_offset(*city_time, utc_now)


def extract_city_records(
    root: Tag,
    page_uri: str,
    utc_now: datetime,
    sort_mode: SortMode = SortMode.BY_NAME,
) -> CityRecordSet:
    """
    Walk every descendant of ``root`` and collect the city records.

    Args:
        root: Parsed page (a BeautifulSoup document or any element)
        page_uri: URL the page was fetched from; anchor links resolve against its host
        utc_now: Current instant used to infer offsets
        sort_mode: Ordering of the returned records

    Returns:
        Ordered set of city records, unique by name
    """
    base_url = page_base_url(page_uri)
    if base_url is None:
        logger.warning(f"Page URI {page_uri!r} has no scheme or host; city links left empty")

    records = CityRecordSet(sort_mode=sort_mode)
    pending = CityRecord(sort_mode=sort_mode)

    for element in root.descendants:
        if not isinstance(element, Tag):
            continue

        if element.name == "a":
            pending.name = flat_text(element).strip()
            pending.url = resolve_city_url(base_url, element.get("href"))
            continue

        city_id = parse_city_id(element.get("id"))
        if city_id is None:
            continue

        if city_id != pending.id:
            pending.id = city_id
            pending.is_dst = "*" in flat_text(element)
            pending.raw_time_string = ""
            pending.utc_offset = ZERO_OFFSET
        else:
            pending.raw_time_string = flat_text(element)
            update_offset(pending, utc_now)
            if records.add(replace(pending)):
                logger.debug(f"Added: {pending}")
            else:
                logger.debug(f"Skipped duplicate city {pending.name!r}")

    return records


def parse_page(
    html: str,
    page_uri: str,
    utc_now: datetime,
    sort_mode: SortMode = SortMode.BY_NAME,
) -> CityRecordSet:
    """Parse raw page markup and extract its city records."""
    soup = BeautifulSoup(html, "html.parser")
    return extract_city_records(soup, page_uri, utc_now, sort_mode)
