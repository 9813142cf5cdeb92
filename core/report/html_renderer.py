"""Self-contained HTML rendering of an aggregate report."""

from __future__ import annotations

from html import escape

from core.report.models import AggregateReport, MissingItems, PageReport
from core.scan.models import Occurrence

ALL_FOUND_TEXT = "All expected ids/classes were found in scanned files."

_STYLE = """
  body{font-family:system-ui,Segoe UI,Roboto,Helvetica,Arial;margin:20px;}
  code{background:#f4f4f4;padding:2px 6px;border-radius:4px;}
  section{border:1px solid #ddd;padding:10px;margin:10px 0;}
  section h3{margin:0 0 6px 0;}
  .banner{padding:12px 16px;border-radius:6px;font-weight:600;white-space:pre-wrap;}
  .banner.failed{background:#fde8e8;color:#b00;border:2px solid #b00;}
  .banner.passed{background:#e8f7ea;color:#186a2b;border:2px solid #186a2b;}
  .missing{color:#b00;}
  .ok{color:green;}
  .occurrences{margin-left:12px;}
  .warnings{color:#8a5a00;}
"""


def summary_lines(report: AggregateReport) -> list[str]:
    """One line per page with missing items, or a single all-found line."""

    summary = report.summary
    if not summary:
        return [ALL_FOUND_TEXT]
    return [f"{page}: {_missing_text(missing)}" for page, missing in summary.items()]


def render_html_report(report: AggregateReport) -> str:
    """Render report.html with the pass/fail banner at the top of the page."""

    passed = report.passed
    headline = (
        "PASSED: every expected id/class was found."
        if passed
        else f"FAILED: {len(report.summary)} page(s) are missing ids/classes."
    )
    banner_text = "\n".join([headline, *([] if passed else summary_lines(report))])
    auxiliary = (
        f"<p>Auxiliary document: <code>{escape(report.auxiliary_source)}</code></p>"
        if report.auxiliary_source
        else ""
    )
    warnings = ""
    if report.warnings:
        items = "".join(f"<li>{escape(message)}</li>" for message in report.warnings)
        warnings = f'<h2>Warnings</h2><ul class="warnings">{items}</ul>'
    pages_html = "\n".join(
        _render_page(page_key, page) for page_key, page in report.pages.items()
    )

    return f"""<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>ID/Class Check Report</title>
<style>{_STYLE}</style>
</head>
<body>
  <h1>ID / Class Check Report</h1>
  <div id="summary-banner" class="banner {'passed' if passed else 'failed'}" role="alert">{escape(banner_text)}</div>
  <p>Scanned folder: <code>{escape(report.scanned_folder)}</code></p>
  <p>Files scanned: {report.scanned_files_count}</p>
  {auxiliary}
  <p>Strategy: <code>{escape(report.strategy)}</code> | case sensitive: {'yes' if report.case_sensitive else 'no'} | generated: {escape(report.timestamp.isoformat())}</p>
  <h2>Summary</h2>
  <pre id="summary-block">{escape(chr(10).join(summary_lines(report)))}</pre>
  {warnings}
  <h2>Details</h2>
  {pages_html}
</body>
</html>
"""


def _render_page(page_key: str, page: PageReport) -> str:
    if page.matched_files:
        names = ", ".join(escape(path) for path in page.matched_files)
        matched = f"<div><em>Matched files ({escape(page.resolution)}): {names}</em></div>"
    else:
        matched = "<div><em>Matched files: none</em></div>"

    missing = page.missing
    if missing.is_empty():
        status = '<div class="ok"><strong>All found</strong></div>'
    else:
        status = (
            '<div class="missing"><strong>Missing:</strong>'
            f"<div>IDs: {escape(', '.join(missing.ids) or '-')}</div>"
            f"<div>Classes: {escape(', '.join(missing.classes) or '-')}</div></div>"
        )

    found_items = "".join(
        _render_found_item(key, occurrences) for key, occurrences in page.found.items()
    )
    return (
        f"<section><h3>{escape(page_key)}</h3>{matched}{status}"
        f"<ul>{found_items}</ul></section>"
    )


def _render_found_item(key: str, occurrences: list[Occurrence]) -> str:
    if not occurrences:
        return f'<li><code>{escape(key)}</code> (0) <span class="missing">-</span></li>'
    rows = "<br>".join(_render_occurrence(item) for item in occurrences)
    return (
        f"<li><details><summary><code>{escape(key)}</code> ({len(occurrences)})</summary>"
        f'<div class="occurrences">{rows}</div></details></li>'
    )


def _render_occurrence(occurrence: Occurrence) -> str:
    location = escape(occurrence.file)
    if occurrence.line is not None:
        location += f" (line {occurrence.line})"
    if occurrence.source == "auxiliary":
        location += " [auxiliary]"
    return f"{location} - {escape(occurrence.excerpt)}"


def _missing_text(missing: MissingItems) -> str:
    parts: list[str] = []
    if missing.ids:
        parts.append(f"IDs missing: {', '.join(missing.ids)}")
    if missing.classes:
        parts.append(f"Classes missing: {', '.join(missing.classes)}")
    return " ; ".join(parts)
