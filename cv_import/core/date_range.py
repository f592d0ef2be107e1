"""
Date-range recognition for work-history lines.

Supported shapes (case-insensitive, English month names only):
  'Jan 2022 – Present'
  'March 2019 - Dec. 2021'
  '2018—2020'
  'Network Engineer | Acme Ltd | 2019 – 2021'   (range after the role header)
  '2019 - Current, Senior Analyst, Bank of Leeds' (range before the role header)

Years must fall in 1900-2099 so counts like "1200-1500 tickets" are not
taken for ranges. Dates are normalized to YYYY-MM-01; a bare year means January.
"""

import re
from dataclasses import dataclass
from typing import Optional


MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_MONTH_ALT = "|".join(sorted(MONTHS, key=len, reverse=True))


def _point(tag: str) -> str:
    return (
        rf"(?:(?P<{tag}_month>{_MONTH_ALT})\.?\s+)?"
        rf"(?P<{tag}_year>(?:19|20)\d{{2}})(?!\d)"
    )


DATE_RANGE_RE = re.compile(
    rf"(?<![\w]){_point('start')}"
    r"\s*[–—-]\s*"
    rf"(?:{_point('end')}|(?P<current>present|current)\b)",
    re.IGNORECASE,
)

# Separators left dangling once the range is cut out of a header line
HEADER_EDGE_RE = re.compile(r"^[\s|,·()–—-]+|[\s|,·()–—-]+$")
EMPTY_BRACKETS_RE = re.compile(r"\(\s*\)|\[\s*\]")
SPACE_BEFORE_COMMA_RE = re.compile(r"\s+,")


@dataclass(frozen=True)
class DateRange:
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False
    header_line: Optional[str] = None


def month_number(name: Optional[str]) -> int:
    """Month number for an English month name or abbreviation; 1 when absent/unknown."""
    if not name:
        return 1
    return MONTHS.get(name.lower().rstrip("."), 1)


def _iso(month: Optional[str], year: str) -> str:
    return f"{int(year):04d}-{month_number(month):02d}-01"


def parse_date_range(line: str) -> Optional[DateRange]:
    """
    Find a date range in a line.

    Returns None when there is no range, which is the normal case for most
    lines and not an error.
    """
    m = DATE_RANGE_RE.search(line)
    if not m:
        return None

    start_date = _iso(m.group("start_month"), m.group("start_year"))
    is_current = m.group("current") is not None
    end_date = None if is_current else _iso(m.group("end_month"), m.group("end_year"))

    # 'Acme Ltd (2019 – 2021) Engineer' leaves '( )' mid-line
    residual = EMPTY_BRACKETS_RE.sub(" ", line[: m.start()] + " " + line[m.end():])
    residual = SPACE_BEFORE_COMMA_RE.sub(",", " ".join(residual.split()))
    header = HEADER_EDGE_RE.sub("", residual)

    return DateRange(
        start_date=start_date,
        end_date=end_date,
        is_current=is_current,
        header_line=header or None,
    )


def is_bare_date_range(line: str) -> bool:
    """True for a line that is only a range, e.g. 'Jan 2022 – Present'."""
    date_range = parse_date_range(line)
    return date_range is not None and not date_range.header_line
