from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional

from cv_import.config import MAX_TEXT_CHARS


SectionKey = Literal["experience", "projects", "achievements", "skills", "education"]


class CvImportProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: Optional[str] = None
    headline: Optional[str] = None


class CvImportAchievement(BaseModel):
    """STAR-shaped achievement. Only title/action/metrics are filled by the importer."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=3, max_length=80)
    situation: Optional[str] = None
    task: Optional[str] = None
    action: Optional[str] = None
    result: Optional[str] = None
    metrics: Optional[str] = Field(default=None, max_length=120)


class WorkHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_title: str = Field(..., min_length=2)
    company: str = Field(..., min_length=2)
    location: Optional[str] = Field(default=None, max_length=80)
    start_date: str = Field(..., pattern=r"^\d{4}-\d{2}-01$", description="YYYY-MM-01")
    end_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-01$")
    is_current: bool = False
    summary: Optional[str] = Field(default=None, max_length=300)
    bullets: List[str] = Field(default_factory=list, max_length=6)


class ExtractedMeta(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skills: Optional[List[str]] = None
    sections_detected: List[str] = Field(
        default_factory=list,
        alias="sectionsDetected",
        description="Section labels in first-seen order",
    )
    warnings: List[str] = Field(default_factory=list)


class CvImportPreview(BaseModel):
    model_config = ConfigDict(frozen=True)

    profile: CvImportProfile = Field(default_factory=CvImportProfile)
    achievements: List[CvImportAchievement] = Field(default_factory=list)
    work_history: List[WorkHistoryEntry] = Field(default_factory=list)
    extracted: ExtractedMeta = Field(default_factory=ExtractedMeta)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict: camelCase aliases, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CvTextImportRequest(BaseModel):
    text: str = Field(
        ...,
        max_length=MAX_TEXT_CHARS,
        description="Plain text already extracted from a CV document",
    )
