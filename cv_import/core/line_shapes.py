"""
Line-shape heuristics.

Independent predicates over a single line. They hold no state and know nothing
about document position; the extractors decide how to combine them.
"""

import re
from typing import Optional

from cv_import.core.sections import get_section_key, normalize_heading


CONTACT_RE = re.compile(r"(@|https?://|linkedin|github)", re.IGNORECASE)
PHONE_RE = re.compile(r"\+?\d[\d\s\-()]{7,}")

# •, -, *, en dash, em dash, or "1." style numbering; content must follow
BULLET_RE = re.compile(r"^(?:•|-|\*|–|—|\d+\.)\s+(.*)$")

NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z'\-.\s]+$")
YEAR_RE = re.compile(r"\d{4}")
DIGIT_RE = re.compile(r"\d")

FLUFF_HEADERS = frozenset({"cv", "curriculum vitae", "resume"})

COMPANY_RE = re.compile(
    r"\b(?:ltd|inc|plc|llc|university|nhs|bank|council|trust|agency|group|company)\b",
    re.IGNORECASE,
)


def is_section_heading(line: str) -> bool:
    return get_section_key(line) is not None


def is_contact_line(line: str) -> bool:
    """Email, URL, LinkedIn/GitHub handle, or a phone-number-shaped run."""
    if CONTACT_RE.search(line):
        return True
    return bool(PHONE_RE.search(line))


def strip_bullet(line: str) -> Optional[str]:
    """
    Return the content after a bullet marker, or None if the line is not a bullet.

    Examples:
      '• Led SIEM tuning' -> 'Led SIEM tuning'
      '3. Migrated DNS' -> 'Migrated DNS'
      '-5% churn' -> None (marker must be followed by whitespace)
    """
    m = BULLET_RE.match(line)
    if m:
        return m.group(1)
    return None


def is_bullet_line(line: str) -> bool:
    return strip_bullet(line) is not None


def is_fluff_header(line: str) -> bool:
    return normalize_heading(line) in FLUFF_HEADERS


def looks_like_name(line: str) -> bool:
    if len(line) < 3 or len(line) > 60:
        return False
    if len(line.split(" ")) < 2:
        return False
    if DIGIT_RE.search(line):
        return False
    return bool(NAME_RE.match(line))


def looks_like_headline(line: str) -> bool:
    if len(line) < 3 or len(line) > 90:
        return False
    return not YEAR_RE.search(line)


def looks_like_location(line: str) -> bool:
    if len(line) > 80 or "," not in line:
        return False
    return not (is_contact_line(line) or is_section_heading(line))


def looks_like_summary(line: str) -> bool:
    if len(line) < 10 or len(line) > 160:
        return False
    return not (is_contact_line(line) or is_section_heading(line))


def looks_like_company(text: str) -> bool:
    """Organisational suffix or keyword: 'Acme Ltd', 'NHS Trust', 'Leeds City Council'."""
    return bool(COMPANY_RE.search(text))


def looks_like_context_line(line: str) -> bool:
    """A role/project title candidate that precedes a run of bullets."""
    if len(line) < 3 or len(line) > 120:
        return False
    return not (is_contact_line(line) or is_section_heading(line))
