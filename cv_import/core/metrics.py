"""
Quantified-phrase detection for achievement bullets.

Pulls numbers (with currency, percent and magnitude suffixes) out of an action
sentence together with the unit words right after them, e.g.

  'Reduced incidents by 30% and improved MTTR to 2 hours across 3 sites.'
      -> '30%; 2 hours; 3'
  'Kept SLA 99.9 for 12 months' -> 'SLA 99.9; 99.9; 12 months'
"""

import re
from typing import List

from cv_import.core.text_normalization import clamp_text


METRICS_MAX_CHARS = 120
LOOKAHEAD_TOKENS = 3
PHRASE_SEPARATOR = "; "

NUMERIC_TOKEN_RE = re.compile(
    r"^(?:£|\$|€)?\d+(?:[.,]\d+)?%?(?:k|m|bn|million|billion)?$",
    re.IGNORECASE,
)

ENCLOSING_CHARS = "()[],"
TRAILING_PUNCT = ".,;:"

METRIC_UNITS = frozenset({
    # time
    "hours", "hour", "hrs", "days", "day", "weeks", "week", "months", "month",
    "years", "year", "mins", "minutes", "minute", "seconds", "second",
    # volume
    "tickets", "incidents", "requests", "users", "clients", "customers", "issues",
    # service / money
    "sla", "mttr", "mttd", "uptime", "availability", "cost", "savings",
    "reduction", "increase", "improvement", "budget", "revenue",
})


def _is_numeric(token: str) -> bool:
    # thousands commas ("$1,200,000") are ignored for matching only
    return bool(NUMERIC_TOKEN_RE.match(token.rstrip(TRAILING_PUNCT).replace(",", "")))


def _is_unit(token: str) -> bool:
    cleaned = token.rstrip(TRAILING_PUNCT).lower()
    return cleaned in METRIC_UNITS or (cleaned.endswith("%") and len(cleaned) > 1)


def _dedupe_casefold(phrases: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for phrase in phrases:
        phrase = phrase.strip()
        key = phrase.lower()
        if phrase and key not in seen:
            seen.add(key)
            out.append(phrase)
    return out


def extract_metrics_from_action(action: str) -> str:
    """
    Return metric phrases joined with '; ', at most 120 characters.
    An empty string means the action carries no number worth surfacing.
    """
    tokens = [tok.strip(ENCLOSING_CHARS) for tok in action.split()]
    tokens = [tok for tok in tokens if tok]

    metrics: List[str] = []
    for idx, token in enumerate(tokens):
        if _is_numeric(token):
            phrase = [token.rstrip(TRAILING_PUNCT)]
            for nxt in tokens[idx + 1: idx + 1 + LOOKAHEAD_TOKENS]:
                if not _is_unit(nxt):
                    break
                phrase.append(nxt.rstrip(TRAILING_PUNCT))
            metrics.append(" ".join(phrase))

        # "SLA 99.9" ordering: unit word first, number second
        if token.lower() in METRIC_UNITS and idx + 1 < len(tokens):
            nxt = tokens[idx + 1]
            if _is_numeric(nxt):
                metrics.append(f"{token.upper()} {nxt.rstrip(TRAILING_PUNCT)}")

    unique = _dedupe_casefold(metrics)
    if not unique:
        return ""
    return clamp_text(PHRASE_SEPARATOR.join(unique), METRICS_MAX_CHARS, separator=PHRASE_SEPARATOR)
