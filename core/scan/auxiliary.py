"""Auxiliary document text extraction (PDF or plain text)."""

from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader

from core.scan.models import AuxiliaryText
from core.utils.errors import ExtractionError

logger = logging.getLogger("hookcheck.scan")


def extract_text(path: Path) -> str:
    """Extract searchable text from a PDF, or read any other file as UTF-8 text."""

    if not path.is_file():
        raise ExtractionError(f"Auxiliary document not found: {path}", path=path)

    if path.suffix.lower() != ".pdf":
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ExtractionError(f"Cannot read {path}: {exc}", path=path) from exc

    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:  # noqa: BLE001
        raise ExtractionError(
            f"Failed to parse PDF {path}: {type(exc).__name__}: {exc}", path=path
        ) from exc
    return "\n".join(pages)


def load_auxiliary_text(path: Path | None) -> tuple[AuxiliaryText | None, list[str]]:
    """Load auxiliary text, degrading to empty text with a warning on failure."""

    if path is None:
        return None, []

    try:
        text = extract_text(path)
    except ExtractionError as exc:
        message = f"auxiliary text unavailable, continuing without it: {exc}"
        logger.warning(message)
        return AuxiliaryText(source=str(path), text=""), [message]

    if not text.strip():
        logger.warning("auxiliary document %s produced no text", path)
    return AuxiliaryText(source=str(path), text=text), []
