import logging

from cv_import.core.achievement_extractor import extract_achievements
from cv_import.core.profile_extractor import extract_profile
from cv_import.core.schemas import CvImportPreview, ExtractedMeta
from cv_import.core.sections import build_section_map
from cv_import.core.text_normalization import to_lines
from cv_import.core.work_history_extractor import extract_work_history

logger = logging.getLogger(__name__)


def extract_cv_preview(text: str) -> CvImportPreview:
    """
    Turn plain CV text into a reviewable preview.

    Lines and section positions are computed once and handed read-only to the
    profile, achievement and work-history extractors. Nothing here raises on
    odd input: unusable lines are skipped and gaps are reported as warnings.
    """
    lines = tuple(to_lines(text or ""))
    if not lines:
        logger.debug("Empty CV text, returning empty preview")
        return CvImportPreview()

    sections = build_section_map(lines)
    logger.debug(f"Preview: {len(lines)} lines, sections={list(sections.keys)}")
    profile = extract_profile(lines)
    achievements = extract_achievements(lines, sections)
    work_history = extract_work_history(lines, sections)

    return CvImportPreview(
        profile=profile,
        achievements=achievements.achievements,
        work_history=work_history.entries,
        extracted=ExtractedMeta(
            skills=achievements.skills or None,
            sections_detected=list(sections.labels),
            warnings=achievements.warnings + work_history.warnings,
        ),
    )
