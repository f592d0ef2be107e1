from io import BytesIO
from typing import List

from docx import Document

from cv_import.core.errors import DocumentReadError


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Deterministically extract paragraph text from a DOCX.

    Body paragraphs come first, then the paragraphs of every table cell.
    Empty paragraphs are kept as blank lines so paragraph breaks survive.
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except Exception as exc:
        raise DocumentReadError("docx", f"unreadable DOCX ({exc.__class__.__name__})") from exc

    out: List[str] = [(p.text or "").strip() for p in doc.paragraphs]
    seen_cells = set()
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                # merged cells are returned once per grid position
                if cell._tc in seen_cells:
                    continue
                seen_cells.add(cell._tc)
                out.extend((p.text or "").strip() for p in cell.paragraphs)
    return "\n".join(out)
