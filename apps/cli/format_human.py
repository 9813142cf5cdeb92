"""Human-readable check summary rendering for CLI output."""

from __future__ import annotations

from core.report.models import AggregateReport

_MAX_LISTED = 8


def render_check_summary(report: AggregateReport) -> str:
    """Render one-screen human-readable check summary."""

    summary = report.summary
    lines: list[str] = []
    lines.append("check_summary:")
    lines.append(
        f"strategy={report.strategy} case_sensitive={str(report.case_sensitive).lower()} "
        f"files={report.scanned_files_count}"
    )
    lines.append(f"result={'PASSED' if report.passed else 'FAILED'}")
    lines.append(f"pages: total={len(report.pages)} missing={len(summary)}")

    for page_key, missing in summary.items():
        parts: list[str] = []
        if missing.ids:
            parts.append(f"ids={_listing(missing.ids)}")
        if missing.classes:
            parts.append(f"classes={_listing(missing.classes)}")
        resolution = report.pages[page_key].resolution
        lines.append(f"missing: {page_key} [{resolution}] {' '.join(parts)}")

    fallback_pages = sorted(
        page_key for page_key, page in report.pages.items() if page.resolution == "fallback"
    )
    if fallback_pages:
        lines.append(f"fallback_scan: {', '.join(fallback_pages)}")

    return "\n".join(lines)


def _listing(items: list[str]) -> str:
    if len(items) <= _MAX_LISTED:
        return ",".join(items)
    return ",".join(items[:_MAX_LISTED]) + f",...(+{len(items) - _MAX_LISTED})"
