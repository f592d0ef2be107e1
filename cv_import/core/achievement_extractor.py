"""
Achievement and skills extraction.

One forward pass over the compact lines. The pass is an explicit state
(`AchievementState`) advanced one line at a time by `step()`, so each
transition can be exercised on its own:

  heading line      -> switch section (entering Skills clears the context)
  line in Skills    -> split into skill tokens
  bullet line       -> achievement, titled by the current context line
  other line        -> may become the new context line
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from cv_import.core.line_shapes import looks_like_context_line, strip_bullet
from cv_import.core.metrics import extract_metrics_from_action
from cv_import.core.schemas import CvImportAchievement, SectionKey
from cv_import.core.sections import RELEVANT_SECTIONS, SectionMap
from cv_import.core.text_normalization import clamp_title

logger = logging.getLogger(__name__)

MIN_ACTION_CHARS = 15
MIN_TITLE_CHARS = 3
MIN_SKILL_CHARS = 2

NO_RELEVANT_SECTION_WARNING = (
    "No Experience/Projects/Achievements section detected; imported bullets may be incomplete."
)
NO_BULLETS_WARNING = "No bullet points detected; imported achievements may be limited."

SKILL_SPLIT_RE = re.compile(r"[;,•]")


@dataclass(frozen=True)
class AchievementExtraction:
    achievements: List[CvImportAchievement] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def split_skills(line: str) -> List[str]:
    """
    Skill tokens from one line of a Skills section.

    Examples:
      'Python, SQL; Splunk' -> ['Python', 'SQL', 'Splunk']
      '• AWS • Azure' -> ['AWS', 'Azure']
    """
    body = strip_bullet(line)
    if body is None:
        body = line
    parts = [part.strip() for part in SKILL_SPLIT_RE.split(body)]
    return [part for part in parts if len(part) >= MIN_SKILL_CHARS]


def build_achievement(action: str, context: str) -> Optional[CvImportAchievement]:
    """Achievement for one bullet, or None when the bullet is too thin to keep."""
    action = action.strip()
    if len(action) < MIN_ACTION_CHARS:
        return None

    title = clamp_title(context) if context else clamp_title(action)
    if len(title) < MIN_TITLE_CHARS:
        return None

    metrics = extract_metrics_from_action(action)
    return CvImportAchievement(
        title=title,
        action=action,
        metrics=metrics or None,
    )


@dataclass
class AchievementState:
    has_relevant_section: bool
    current_section: Optional[SectionKey] = None
    current_context: str = ""
    achievements: List[CvImportAchievement] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    def in_scope(self) -> bool:
        """Bullets count everywhere when no relevant heading exists, else only under one."""
        if not self.has_relevant_section:
            return True
        return self.current_section in RELEVANT_SECTIONS

    def enter_section(self, key: SectionKey) -> None:
        self.current_section = key
        if key == "skills":
            self.current_context = ""

    def add_skills(self, line: str) -> None:
        for skill in split_skills(line):
            if skill not in self.skills:
                self.skills.append(skill)

    def step(self, line: str, section_key: Optional[SectionKey] = None) -> None:
        if section_key:
            self.enter_section(section_key)
            return

        if self.current_section == "skills":
            self.add_skills(line)
            return

        bullet = strip_bullet(line)
        if bullet is not None:
            if self.in_scope():
                achievement = build_achievement(bullet, self.current_context)
                if achievement:
                    self.achievements.append(achievement)
            return

        if self.in_scope() and looks_like_context_line(line):
            self.current_context = line


def extract_achievements(lines: Sequence[str], sections: SectionMap) -> AchievementExtraction:
    if not lines:
        return AchievementExtraction()

    state = AchievementState(has_relevant_section=sections.has_relevant())
    for idx, line in enumerate(lines):
        state.step(line, sections.key_at(idx))

    warnings: List[str] = []
    if not state.has_relevant_section:
        warnings.append(NO_RELEVANT_SECTION_WARNING)
    if not state.achievements:
        warnings.append(NO_BULLETS_WARNING)

    logger.debug(
        f"Achievements: {len(state.achievements)} extracted, "
        f"{len(state.skills)} skills, relevant_section={state.has_relevant_section}"
    )
    return AchievementExtraction(
        achievements=state.achievements,
        skills=state.skills,
        warnings=warnings,
    )
