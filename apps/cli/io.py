"""CLI I/O helpers for atomic report writing and opening."""

from __future__ import annotations

import json
import logging
import tempfile
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.report.html_renderer import render_html_report
from core.report.models import AggregateReport

logger = logging.getLogger("hookcheck.cli")


@dataclass(frozen=True)
class OutputPaths:
    """Fixed output artifact paths for single run."""

    report_json: Path
    report_html: Path


def build_output_paths(out_dir: Path) -> OutputPaths:
    """Build fixed output file paths under out_dir."""

    return OutputPaths(
        report_json=out_dir / "report.json",
        report_html=out_dir / "report.html",
    )


def existing_output_files(paths: OutputPaths) -> list[Path]:
    """Return existing output files among fixed artifact paths."""

    return [path for path in (paths.report_json, paths.report_html) if path.exists()]


def write_report_json_atomic(paths: OutputPaths, report: AggregateReport) -> None:
    """Write the structured report atomically."""

    paths.report_json.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write_text(
        paths.report_json,
        json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n",
    )


def write_report_html_atomic(paths: OutputPaths, report: AggregateReport) -> None:
    """Render and write the HTML report atomically."""

    paths.report_html.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write_text(paths.report_html, render_html_report(report))


def write_error_json_atomic(
    paths: OutputPaths, *, error_type: str, error_message: str, stage: str
) -> None:
    """Write a minimal report.json describing why no report was produced."""

    paths.report_json.parent.mkdir(parents=True, exist_ok=True)
    payload: dict[str, Any] = {
        "passed": False,
        "pages": {},
        "error": {
            "error_type": error_type,
            "error_message": error_message,
            "stage": stage,
        },
    }
    _atomic_write_text(paths.report_json, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")


def open_in_viewer(path: Path) -> bool:
    """Open a file in the platform default viewer; failure is logged, never raised."""

    try:
        opened = webbrowser.open(path.resolve().as_uri())
    except Exception as exc:  # noqa: BLE001
        logger.warning("could not open %s in a viewer: %s", path, exc)
        return False
    if not opened:
        logger.warning("no viewer available to open %s", path)
    return opened


def _atomic_write_text(path: Path, content: str) -> None:
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except Exception:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise

    tmp_path.replace(path)
