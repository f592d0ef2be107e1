from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from cv_import.config import LOG_LEVEL
from cv_import.core.docx_extractor import extract_docx_text
from cv_import.core.errors import DocumentReadError
from cv_import.core.pdf_extractor import extract_pdf_text
from cv_import.core.text_parser import extract_cv_preview

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cv-import",
        description="Build a CV import preview (profile, achievements, work history) as JSON.",
    )
    parser.add_argument("path", type=Path, help="Path to a .txt, .md, .docx or .pdf CV")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write JSON here instead of stdout",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (0 for compact output)",
    )
    return parser


def read_document_text(path: Path) -> str:
    suffix = path.suffix.lower()
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DocumentReadError("file", str(exc)) from exc

    if suffix == ".docx":
        return extract_docx_text(raw)
    if suffix == ".pdf":
        return extract_pdf_text(raw)
    if suffix in {".txt", ".md", ""}:
        return raw.decode("utf-8", errors="replace")
    raise DocumentReadError("file", f"unsupported file type '{suffix}'")


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s | %(name)s | %(message)s")

    try:
        text = read_document_text(args.path)
    except DocumentReadError as exc:
        print(f"cv-import: {exc}", file=sys.stderr)
        return 2

    preview = extract_cv_preview(text)
    payload = json.dumps(
        preview.to_payload(),
        indent=args.indent or None,
        ensure_ascii=False,
    )

    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote preview to {args.output}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
