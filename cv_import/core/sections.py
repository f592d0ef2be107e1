"""
Section heading detection.

A line is a heading purely on its own text: normalize it and compare against
the alias table. No lookahead, no position rules.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from cv_import.core.schemas import SectionKey

logger = logging.getLogger(__name__)


# Table order matters: first key whose alias matches wins.
SECTION_ALIASES: Dict[str, Tuple[str, ...]] = {
    "experience": (
        "experience",
        "work experience",
        "professional experience",
        "employment",
        "employment history",
        "career history",
        "work history",
    ),
    "projects": ("projects", "project experience", "project work", "key projects"),
    "achievements": ("achievements", "key achievements", "accomplishments"),
    "skills": ("skills", "technical skills", "key skills", "core skills"),
    "education": ("education", "qualifications", "certifications"),
}

RELEVANT_SECTIONS = frozenset({"experience", "projects", "achievements"})

NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def normalize_heading(text: str) -> str:
    """
    Lowercase, drop punctuation, collapse whitespace.

    Examples:
      'WORK EXPERIENCE:' -> 'work experience'
      '## Key   Skills' -> 'key skills'
    """
    t = NON_ALNUM_RE.sub("", text.lower())
    return re.sub(r"\s+", " ", t).strip()


_ALIAS_LOOKUP: Dict[str, str] = {}
for _key, _aliases in SECTION_ALIASES.items():
    for _alias in _aliases:
        _ALIAS_LOOKUP.setdefault(normalize_heading(_alias), _key)


def get_section_key(line: str) -> Optional[SectionKey]:
    """Return the section key for a heading line, or None for ordinary text."""
    normalized = normalize_heading(line)
    if not normalized:
        return None
    return _ALIAS_LOOKUP.get(normalized)


def to_section_label(key: str) -> str:
    return key[:1].upper() + key[1:]


@dataclass(frozen=True)
class SectionMap:
    """Heading positions for one document. Built once, shared read-only."""
    lookup: Mapping[int, SectionKey] = field(default_factory=dict)
    labels: Tuple[str, ...] = ()

    @property
    def keys(self) -> Tuple[SectionKey, ...]:
        return tuple(dict.fromkeys(self.lookup[i] for i in sorted(self.lookup)))

    def key_at(self, index: int) -> Optional[SectionKey]:
        return self.lookup.get(index)

    def has(self, key: str) -> bool:
        return key in self.lookup.values()

    def has_relevant(self) -> bool:
        return any(key in RELEVANT_SECTIONS for key in self.lookup.values())


def build_section_map(lines: Sequence[str]) -> SectionMap:
    lookup: Dict[int, SectionKey] = {}
    labels: List[str] = []

    for idx, line in enumerate(lines):
        key = get_section_key(line)
        if not key:
            continue
        logger.debug(f"SECTION HEADER DETECTED at line {idx}: '{line}' -> section_type='{key}'")
        lookup[idx] = key
        label = to_section_label(key)
        if label not in labels:
            labels.append(label)

    return SectionMap(lookup=MappingProxyType(lookup), labels=tuple(labels))
