"""Orchestration pipeline: discover -> read -> extract -> resolve/scan -> aggregate."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

from core.report.aggregator import build_report
from core.report.models import AggregateReport
from core.scan.auxiliary import load_auxiliary_text
from core.scan.discovery import discover_files, read_candidate_files
from core.scan.scanner import ScanStrategy, create_scanner
from core.spec.models import Specification
from core.utils.errors import NotFoundError

logger = logging.getLogger("hookcheck.pipeline")


def run_check(
    spec: Specification,
    search_folder: Path,
    auxiliary_path: Path | None = None,
    strategy: ScanStrategy = "pattern",
) -> AggregateReport:
    """Execute one full check over search_folder and return the run report."""

    if not search_folder.is_dir():
        raise NotFoundError(f"Search folder not found: {search_folder}", path=search_folder)

    start = time.perf_counter()
    scanner = create_scanner(strategy, case_sensitive=spec.settings.case_sensitive)

    paths = discover_files(search_folder, spec.settings.extensions)
    files, warnings = read_candidate_files(paths)
    _log_event(
        logging.INFO,
        "discovered",
        folder=str(search_folder),
        files=len(files),
        read_errors=len(warnings),
    )

    auxiliary, auxiliary_warnings = load_auxiliary_text(auxiliary_path)
    warnings.extend(auxiliary_warnings)

    report = build_report(
        spec,
        files,
        scanner,
        scanned_folder=str(search_folder),
        strategy=strategy,
        auxiliary=auxiliary,
        warnings=warnings,
    )
    _log_event(
        logging.INFO,
        "done",
        pages=len(report.pages),
        pages_missing=len(report.summary),
        passed=report.passed,
        total_ms=int((time.perf_counter() - start) * 1000),
    )
    return report


def _log_event(level: int, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":")))
