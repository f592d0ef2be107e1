import logging
import re
from io import BytesIO
from itertools import groupby
from typing import Any, Dict, List

import pdfplumber

from cv_import.core.errors import DocumentReadError

logger = logging.getLogger(__name__)

SPACED_CHARS_RE = re.compile(r"^(?:[A-Za-z0-9@.()\-\+]\s+){2,}[A-Za-z0-9@.()\-\+]+$")


def _despace_if_needed(line: str) -> str:
    """
    Collapse letter-spaced lines some PDF exporters produce.

      'E X P E R I E N C E' -> 'EXPERIENCE'
      'J O H N   D O E' -> 'JOHN DOE'
    """
    stripped = line.strip()
    if not SPACED_CHARS_RE.match(stripped):
        return stripped
    # a run of 2+ spaces is the only word boundary left
    words = re.split(r"\s{2,}", stripped)
    return " ".join("".join(w.split()) for w in words if w.strip())


def _page_lines(page: Any, *, x_tolerance: float = 3, y_tolerance: float = 2, row_height: float = 3) -> List[str]:
    """
    Visual lines of one page, built from pdfplumber word boxes.

    Words whose tops fall in the same `row_height` band form one line and are
    joined left to right with single spaces.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
    )
    if not words:
        return []

    def row(word: Dict[str, Any]) -> int:
        return round(word["top"] / row_height)

    ordered = sorted(words, key=lambda w: (row(w), w["x0"]))
    return [
        _despace_if_needed(" ".join(w["text"] for w in group))
        for _, group in groupby(ordered, key=row)
    ]


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Deterministically extract the text layer of a PDF, one visual line per line.
    Pages are separated by a blank line. Scanned PDFs (no text layer) give "".
    """
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            pages = ["\n".join(_page_lines(page)) for page in pdf.pages]
    except Exception as exc:
        raise DocumentReadError("pdf", f"unreadable PDF ({exc.__class__.__name__})") from exc

    logger.debug(f"PDF text extracted from {len(pages)} page(s)")
    return "\n\n".join(page for page in pages if page)
