"""
Text normalization utilities for CV text handed over by a document reader.

Two line modes:
- to_lines(): compact, blank lines removed (section/profile/achievement/work history)
- to_paragraph_lines(): blank lines kept as "" markers so paragraphs can be recovered

Plus the clamps used to keep extracted strings within their field limits.
Nothing here rewrites wording: cleanup is limited to whitespace and invisible
characters, so every output line is a substring of the cleaned input.
"""

import re
from typing import List, Optional, Tuple


# ============================================================================
# Line cleanup
# ============================================================================

ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
WHITESPACE_RE = re.compile(r"\s+")
TRAILING_PUNCT_RE = re.compile(r"[.,;:]+$")


def clean_line(text: str) -> str:
    """
    Normalize a single line without touching its wording.

    Examples:
    - "  Jane\\tDoe \\r" -> "Jane Doe"
    - "Acme\\u00a0Ltd" -> "Acme Ltd"
    - "\\ufeffExperience" -> "Experience"
    """
    if not text:
        return ""
    t = text.replace("\r", "").replace("\u00a0", " ")
    t = ZERO_WIDTH_RE.sub("", t)
    return WHITESPACE_RE.sub(" ", t).strip()


def to_paragraph_lines(text: str) -> List[str]:
    """
    Paragraph-preserving mode: cleaned lines, with each run of blank lines
    collapsed to a single "" marker. No leading or trailing markers.
    """
    out: List[str] = []
    if not text:
        return out

    for raw in text.replace("\r", "").split("\n"):
        line = clean_line(raw)
        if line:
            out.append(line)
        elif out and out[-1]:
            out.append("")

    while out and not out[-1]:
        out.pop()
    return out


def to_lines(text: str) -> List[str]:
    """Compact mode: ordered, trimmed, non-empty lines."""
    return [line for line in to_paragraph_lines(text) if line]


def split_paragraphs(text: str) -> List[Tuple[str, ...]]:
    """Group lines into paragraphs using the blank-line markers."""
    paragraphs: List[Tuple[str, ...]] = []
    current: List[str] = []
    for line in to_paragraph_lines(text):
        if line:
            current.append(line)
            continue
        if current:
            paragraphs.append(tuple(current))
            current = []
    if current:
        paragraphs.append(tuple(current))
    return paragraphs


# ============================================================================
# Clamps
# ============================================================================

TITLE_MAX_CHARS = 80


def clamp_title(value: str, limit: int = TITLE_MAX_CHARS) -> str:
    """Trim, drop trailing punctuation, cut to limit."""
    trimmed = TRAILING_PUNCT_RE.sub("", value.strip())
    if len(trimmed) <= limit:
        return trimmed
    return TRAILING_PUNCT_RE.sub("", trimmed[:limit].strip()).strip()


def clamp_text(value: str, limit: int, separator: Optional[str] = None) -> str:
    """
    Cut text to at most `limit` characters at a safe boundary.

    With a `separator` (e.g. "; " for joined phrases) the last one inside the
    limit is preferred; otherwise, or when there is none, the last whitespace.
    A single token longer than the limit is the only case that gets cut
    mid-token.
    """
    value = value.strip()
    if len(value) <= limit:
        return value

    window = value[: limit + 1]
    cut = window.rfind(separator) if separator else -1
    if cut <= 0:
        cut = window.rfind(" ")
    head = value[:cut] if cut > 0 else value[:limit]
    return TRAILING_PUNCT_RE.sub("", head.strip()).strip()
