from __future__ import annotations

import json
import webbrowser
from datetime import datetime, timezone
from pathlib import Path

import pytest

from apps.cli.io import (
    build_output_paths,
    existing_output_files,
    open_in_viewer,
    write_report_html_atomic,
    write_report_json_atomic,
)
from core.report.models import AggregateReport, PageReport


def _build_report() -> AggregateReport:
    return AggregateReport(
        scanned_folder="site",
        scanned_files_count=1,
        pages={
            "Home.php": PageReport(
                expected_ids=["logo"],
                matched_files=["site/Home.php"],
                resolution="exact",
                found={"id:logo": []},
            )
        },
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


def test_write_report_json_atomic_cleans_tmp_on_success(tmp_path: Path) -> None:
    paths = build_output_paths(tmp_path / "nested")

    write_report_json_atomic(paths, _build_report())

    payload = json.loads(paths.report_json.read_text(encoding="utf-8"))
    assert payload["pages"]["Home.php"]["missing"]["ids"] == ["logo"]
    assert list(paths.report_json.parent.glob("report.json.*.tmp")) == []
    assert existing_output_files(paths) == [paths.report_json]


def test_write_report_html_atomic_cleans_tmp_on_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    paths = build_output_paths(tmp_path)

    def broken_render(_: AggregateReport) -> str:
        raise RuntimeError("render failed")

    monkeypatch.setattr("apps.cli.io.render_html_report", broken_render)

    with pytest.raises(RuntimeError, match="render failed"):
        write_report_html_atomic(paths, _build_report())

    assert not paths.report_html.exists()
    assert list(tmp_path.glob("report.html.*.tmp")) == []


def test_open_in_viewer_never_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "report.html"
    target.write_text("<html></html>", encoding="utf-8")

    def broken_open(_: str) -> bool:
        raise webbrowser.Error("no runnable browser")

    monkeypatch.setattr(webbrowser, "open", broken_open)
    assert open_in_viewer(target) is False

    calls: list[str] = []
    monkeypatch.setattr(webbrowser, "open", lambda uri: calls.append(uri) or True)
    assert open_in_viewer(target) is True
    assert calls == [target.resolve().as_uri()]
