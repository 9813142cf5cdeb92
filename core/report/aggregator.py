"""Aggregation of scanner results into page and run reports."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from core.report.models import AggregateReport, PageReport
from core.scan.models import AuxiliaryText, CandidateFile, class_key, id_key
from core.scan.resolver import resolve_candidates
from core.scan.scanner import OccurrenceScanner, ScanStrategy, scan_auxiliary_text
from core.spec.models import ExpectedSet, SpecSettings, Specification


def build_page_report(
    page_key: str,
    expected: ExpectedSet,
    pool: Sequence[CandidateFile],
    scanner: OccurrenceScanner,
    settings: SpecSettings,
    auxiliary: AuxiliaryText | None = None,
) -> PageReport:
    """Resolve candidates for one page, scan them, and merge occurrences."""

    resolution = resolve_candidates(
        page_key, pool, case_sensitive=settings.case_sensitive_filenames
    )
    report = PageReport(
        expected_ids=list(expected.ids),
        expected_classes=list(expected.classes),
        matched_files=[str(item.path) for item in resolution.files],
        resolution=resolution.rule,
    )
    for name in expected.ids:
        report.found[id_key(name)] = []
    for name in expected.classes:
        report.found[class_key(name)] = []

    for candidate in resolution.files:
        report.add_occurrences(scanner.scan(candidate, expected.ids, expected.classes))

    if auxiliary is not None:
        report.add_occurrences(
            scan_auxiliary_text(
                auxiliary,
                expected.ids,
                expected.classes,
                case_sensitive=settings.case_sensitive,
            )
        )
    return report


def build_report(
    spec: Specification,
    files: Sequence[CandidateFile],
    scanner: OccurrenceScanner,
    *,
    scanned_folder: str,
    strategy: ScanStrategy,
    auxiliary: AuxiliaryText | None = None,
    warnings: Sequence[str] = (),
    timestamp: datetime | None = None,
) -> AggregateReport:
    """Build the run report: one page report per spec page, keyed by page."""

    pages = {
        page_key: build_page_report(
            page_key, expected, files, scanner, spec.settings, auxiliary
        )
        for page_key, expected in spec.pages.items()
    }
    return AggregateReport(
        scanned_folder=scanned_folder,
        scanned_files_count=len(files),
        auxiliary_source=auxiliary.source if auxiliary is not None else None,
        strategy=strategy,
        case_sensitive=spec.settings.case_sensitive,
        pages=pages,
        warnings=list(warnings),
        timestamp=timestamp or datetime.now(timezone.utc),
    )
