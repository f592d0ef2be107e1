"""
Work-history extraction.

Role segmentation inside the Experience section only. A date range opens a
role; its header comes from the same line or the line above. Following lines
fill the open role (bullets, location, summary) until the next date range or
heading flushes it.

Supported header shapes:
  'Network Engineer at Acme Ltd'
  'Network Engineer | Acme Ltd | Leeds'
  'Acme Ltd – Network Engineer'          (company first, swapped)
  'Network Engineer, Acme Ltd, Leeds, UK'
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from cv_import.core.date_range import DateRange, is_bare_date_range, parse_date_range
from cv_import.core.line_shapes import (
    is_section_heading,
    looks_like_company,
    looks_like_location,
    looks_like_summary,
    strip_bullet,
)
from cv_import.core.schemas import SectionKey, WorkHistoryEntry
from cv_import.core.sections import SectionMap
from cv_import.core.text_normalization import clamp_text

logger = logging.getLogger(__name__)

MAX_BULLETS = 6
BULLET_MAX_CHARS = 120
LOCATION_MAX_CHARS = 80
SUMMARY_MAX_CHARS = 300
MIN_FIELD_CHARS = 2

NO_ROLES_WARNING = (
    "Experience section detected but no roles could be parsed; manual entry may be needed."
)

AT_SPLIT_RE = re.compile(r"\s+at\s+", re.IGNORECASE)

# Checked in order; the first one present in the header is used
HEADER_SEPARATORS = (" | ", " — ", " – ", " - ", ",")
SWAPPABLE_SEPARATORS = frozenset({" | ", " — ", " – ", " - "})


@dataclass
class RoleDraft:
    job_title: str
    company: str
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False
    location: Optional[str] = None
    summary: Optional[str] = None
    bullets: List[str] = field(default_factory=list)

    def add_bullet(self, text: str) -> None:
        if len(self.bullets) < MAX_BULLETS:
            self.bullets.append(clamp_text(text, BULLET_MAX_CHARS))

    def add_detail(self, line: str) -> None:
        """First location-shaped line sets location, else first summary-shaped line sets summary."""
        if self.location is None and looks_like_location(line):
            self.location = clamp_text(line, LOCATION_MAX_CHARS)
        elif self.summary is None and looks_like_summary(line):
            self.summary = clamp_text(line, SUMMARY_MAX_CHARS)


def parse_role_header(header: str) -> Optional[Dict[str, Optional[str]]]:
    """
    Split a role header into job_title / company / location.

    Returns None when no supported separator is present.

    The company-first swap only looks at organisational keywords, so a title
    such as 'Group Lead | Acme' is also swapped; that ambiguity is accepted.
    """
    header = header.strip()
    if not header:
        return None

    parts = AT_SPLIT_RE.split(header, maxsplit=1)
    if len(parts) == 2 and parts[0].strip() and parts[1].strip():
        return {"job_title": parts[0].strip(), "company": parts[1].strip(), "location": None}

    for sep in HEADER_SEPARATORS:
        if sep not in header:
            continue
        pieces = [p.strip() for p in header.split(sep)]
        pieces = [p for p in pieces if p]
        if len(pieces) < 2:
            continue

        title, company = pieces[0], pieces[1]
        rest = pieces[2:]
        location = ", ".join(rest) if sep == "," else sep.join(rest)
        if sep in SWAPPABLE_SEPARATORS and looks_like_company(title):
            title, company = company, title

        return {"job_title": title, "company": company, "location": location or None}

    return None


def flush_role(draft: Optional[RoleDraft]) -> Optional[WorkHistoryEntry]:
    """Validate a draft: both title and company need 2+ characters, else it is dropped."""
    if draft is None:
        return None
    job_title = draft.job_title.strip()
    company = draft.company.strip()
    if len(job_title) < MIN_FIELD_CHARS or len(company) < MIN_FIELD_CHARS:
        logger.debug(f"Discarding role draft: title='{job_title}' company='{company}'")
        return None

    return WorkHistoryEntry(
        job_title=job_title,
        company=company,
        location=draft.location,
        start_date=draft.start_date,
        end_date=draft.end_date,
        is_current=draft.is_current,
        summary=draft.summary,
        bullets=draft.bullets[:MAX_BULLETS],
    )


def open_role(date_range: DateRange, header: str) -> Optional[RoleDraft]:
    parsed = parse_role_header(header)
    if not parsed:
        return None
    draft = RoleDraft(
        job_title=parsed["job_title"] or "",
        company=parsed["company"] or "",
        start_date=date_range.start_date,
        end_date=date_range.end_date,
        is_current=date_range.is_current,
    )
    if parsed["location"]:
        draft.location = clamp_text(parsed["location"], LOCATION_MAX_CHARS)
    return draft


@dataclass(frozen=True)
class WorkHistoryExtraction:
    entries: List[WorkHistoryEntry] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class WorkHistoryState:
    current_section: Optional[SectionKey] = None
    current_role: Optional[RoleDraft] = None
    entries: List[WorkHistoryEntry] = field(default_factory=list)

    def flush(self) -> None:
        entry = flush_role(self.current_role)
        if entry:
            logger.debug(f"  -> Found work history entry: company='{entry.company}', title='{entry.job_title}'")
            self.entries.append(entry)
        self.current_role = None

    def enter_section(self, key: SectionKey) -> None:
        self.flush()
        self.current_section = key

    def start_role(self, date_range: DateRange, previous: Optional[str]) -> None:
        self.flush()
        header = date_range.header_line
        if not header and previous and not is_section_heading(previous) and strip_bullet(previous) is None:
            header = previous
        if not header:
            return
        self.current_role = open_role(date_range, header)

    def step(
        self,
        line: str,
        section_key: Optional[SectionKey] = None,
        previous: Optional[str] = None,
        next_line: Optional[str] = None,
    ) -> None:
        if section_key:
            self.enter_section(section_key)
            return
        if self.current_section != "experience":
            return

        # Bullets never open a role, even when they mention a year range
        bullet = strip_bullet(line)
        if bullet is None:
            date_range = parse_date_range(line)
            if date_range:
                self.start_role(date_range, previous)
                return

        if self.current_role is None:
            return

        if bullet is not None:
            self.current_role.add_bullet(bullet.strip())
            return

        # a line directly above a bare date range is that role's header
        if next_line and is_bare_date_range(next_line):
            return
        self.current_role.add_detail(line)


def extract_work_history(lines: Sequence[str], sections: SectionMap) -> WorkHistoryExtraction:
    state = WorkHistoryState()
    for idx, line in enumerate(lines):
        state.step(
            line,
            section_key=sections.key_at(idx),
            previous=lines[idx - 1] if idx > 0 else None,
            next_line=lines[idx + 1] if idx + 1 < len(lines) else None,
        )
    state.flush()

    warnings: List[str] = []
    if sections.has("experience") and not state.entries:
        warnings.append(NO_ROLES_WARNING)

    logger.debug(f"Work history: {len(state.entries)} entries")
    return WorkHistoryExtraction(entries=state.entries, warnings=warnings)
