import logging

from fastapi import APIRouter, UploadFile, File, HTTPException

from cv_import.config import MAX_UPLOAD_BYTES
from cv_import.core.docx_extractor import extract_docx_text
from cv_import.core.errors import DocumentReadError
from cv_import.core.pdf_extractor import extract_pdf_text
from cv_import.core.schemas import CvImportPreview, CvTextImportRequest
from cv_import.core.text_parser import extract_cv_preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])

DOCX_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


def _log_preview(action: str, preview: CvImportPreview) -> None:
    logger.info(
        f"[{action}] achievementsCount={len(preview.achievements)} "
        f"workHistoryCount={len(preview.work_history)} "
        f"sectionsDetected={list(preview.extracted.sections_detected)} "
        f"warningsCount={len(preview.extracted.warnings)}"
    )


def _extract_text(raw: bytes, filename: str, content_type: str) -> str:
    # DOCX
    if filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
        return extract_docx_text(raw)
    # PDF
    if filename.endswith(".pdf") or content_type == "application/pdf":
        return extract_pdf_text(raw)
    # Text
    if content_type in TEXT_CONTENT_TYPES or filename.endswith((".txt", ".md")):
        return raw.decode("utf-8", errors="replace")

    raise HTTPException(status_code=415, detail=f"Unsupported content type: {content_type or 'unknown'}")


@router.post(
    "/cv",
    response_model=CvImportPreview,
    response_model_exclude_none=True,
    summary="Preview CV Import",
    description="Extract a reviewable preview (profile, achievements, work history) from a CV file (DOCX, PDF, or TXT). Nothing is stored.",
    responses={
        200: {
            "description": "Preview built (may be empty; see extracted.warnings)",
            "content": {
                "application/json": {
                    "example": {
                        "profile": {"full_name": "Jane Doe", "headline": "Senior Security Engineer"},
                        "achievements": [
                            {
                                "title": "Security Operations Lead, Acme Ltd",
                                "action": "Led SIEM tuning to reduce false positives by 35%.",
                                "metrics": "35%",
                            }
                        ],
                        "work_history": [
                            {
                                "job_title": "Security Operations Lead",
                                "company": "Acme Ltd",
                                "start_date": "2022-01-01",
                                "is_current": True,
                                "bullets": ["Led SIEM tuning to reduce false positives by 35%."],
                            }
                        ],
                        "extracted": {"sectionsDetected": ["Experience"], "warnings": []},
                    }
                }
            },
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File could not be read or has no extractable text"},
    },
)
async def import_cv_file(
    file: UploadFile = File(..., description="CV file (DOCX, PDF, or TXT format)")
):
    """
    Build a CV import preview from an uploaded file.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - TXT (.txt, .md)

    **Returns:**
    - **profile**: full name and headline when confidently detected
    - **achievements**: bullet-derived achievements with detected metrics
    - **work_history**: roles segmented from the Experience section
    - **extracted**: skills, detected sections and warnings
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File is too large. Max size is {MAX_UPLOAD_BYTES // (1024 * 1024)}MB.",
        )

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    try:
        text = _extract_text(raw, filename, content_type)
    except DocumentReadError as exc:
        logger.exception(f"[cv.import.preview] could not read {exc.kind} upload")
        raise HTTPException(status_code=422, detail=f"Unable to read this {exc.kind.upper()} file.") from exc

    if not text.strip():
        raise HTTPException(
            status_code=422,
            detail="File appears to have no extractable text. OCR is not supported.",
        )

    preview = extract_cv_preview(text)
    _log_preview("cv.import.preview", preview)
    return preview


@router.post(
    "/preview",
    response_model=CvImportPreview,
    response_model_exclude_none=True,
    summary="Preview CV Import From Text",
    description="Same preview as /import/cv for text that was already extracted from a document.",
)
def import_cv_text(payload: CvTextImportRequest):
    preview = extract_cv_preview(payload.text)
    _log_preview("cv.import.preview.text", preview)
    return preview
