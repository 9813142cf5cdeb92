"""Markup file discovery and reading."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from core.scan.models import CandidateFile
from core.utils.errors import ReadError

logger = logging.getLogger("hookcheck.scan")


def discover_files(root: Path, extensions: Iterable[str]) -> list[Path]:
    """Return every file under root whose suffix is in extensions, at any depth.

    Results are sorted by their path relative to root so repeated runs over an
    unchanged tree scan files in the same order.
    """

    wanted = {ext.lower() for ext in extensions}
    found = [
        path
        for path in root.rglob("*")
        if path.is_file() and path.suffix.lower() in wanted
    ]
    return sorted(found, key=lambda path: path.relative_to(root).as_posix())


def read_text_file(path: Path) -> str:
    """Read a markup file as UTF-8, replacing undecodable bytes."""

    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise ReadError(f"Cannot read {path}: {exc}", path=path) from exc


def read_candidate_files(paths: Iterable[Path]) -> tuple[list[CandidateFile], list[str]]:
    """Read all files into memory.

    An unreadable file becomes an empty candidate and a warning; it is still
    counted among the scanned files.
    """

    files: list[CandidateFile] = []
    warnings: list[str] = []
    for path in paths:
        try:
            text = read_text_file(path)
        except ReadError as exc:
            message = f"read failed, scanned as empty: {exc}"
            logger.warning(message)
            warnings.append(message)
            files.append(CandidateFile(path=path, text="", read_error=str(exc)))
            continue
        files.append(CandidateFile(path=path, text=text))
    return files, warnings
