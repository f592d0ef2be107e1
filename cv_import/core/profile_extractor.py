import logging
from typing import Optional, Sequence

from cv_import.core.line_shapes import (
    is_contact_line,
    is_fluff_header,
    is_section_heading,
    looks_like_headline,
    looks_like_name,
)
from cv_import.core.schemas import CvImportProfile

logger = logging.getLogger(__name__)

HEADLINE_WINDOW = 3


def _is_noise(line: str) -> bool:
    return is_section_heading(line) or is_contact_line(line) or is_fluff_header(line)


def _find_name_index(lines: Sequence[str]) -> Optional[int]:
    for idx, line in enumerate(lines):
        if not line or _is_noise(line):
            continue
        if looks_like_name(line):
            return idx
    return None


def extract_profile(lines: Sequence[str]) -> CvImportProfile:
    """
    Infer full name and headline from the top of the document.

    The first name-shaped line wins. The headline is only looked for in the
    three lines after the name; without a name there is no headline.
    """
    name_idx = _find_name_index(lines)
    if name_idx is None:
        logger.debug("No name-shaped line found")
        return CvImportProfile()

    headline = None
    for line in lines[name_idx + 1: name_idx + 1 + HEADLINE_WINDOW]:
        if not line or _is_noise(line):
            continue
        if looks_like_headline(line):
            headline = line
            break

    logger.debug(f"Profile: name at line {name_idx}, headline={'yes' if headline else 'no'}")
    return CvImportProfile(full_name=lines[name_idx], headline=headline)
