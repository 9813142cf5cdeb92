from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.scan.discovery import discover_files, read_candidate_files


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_discover_files_walks_every_depth_and_filters_extensions(tmp_path: Path) -> None:
    _touch(tmp_path / "Home.php")
    _touch(tmp_path / "admin" / "deep" / "AdminLogin.PHP")
    _touch(tmp_path / "news" / "index.htm")
    _touch(tmp_path / "style.css")
    _touch(tmp_path / "notes.txt")

    found = discover_files(tmp_path, (".html", ".htm", ".php"))

    assert [path.relative_to(tmp_path).as_posix() for path in found] == [
        "Home.php",
        "admin/deep/AdminLogin.PHP",
        "news/index.htm",
    ]


def test_discover_files_respects_custom_extensions(tmp_path: Path) -> None:
    _touch(tmp_path / "page.twig")
    _touch(tmp_path / "page.html")

    found = discover_files(tmp_path, (".twig",))

    assert [path.name for path in found] == ["page.twig"]


def test_read_candidate_files_decodes_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "legacy.html"
    path.write_bytes(b'<div id="logo">\xff</div>')

    files, warnings = read_candidate_files([path])

    assert warnings == []
    assert files[0].text.startswith('<div id="logo">')
    assert files[0].read_error is None


def test_read_candidate_files_recovers_unreadable_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING, logger="hookcheck.scan")
    good = _touch(tmp_path / "Home.php", '<div id="logo"></div>')
    bad = _touch(tmp_path / "Broken.php", "unused")
    original_read_bytes = Path.read_bytes

    def flaky_read_bytes(self: Path) -> bytes:
        if self.name == "Broken.php":
            raise PermissionError("permission denied")
        return original_read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", flaky_read_bytes)

    files, warnings = read_candidate_files([good, bad])

    assert [item.name for item in files] == ["Home.php", "Broken.php"]
    assert files[1].text == ""
    assert files[1].read_error is not None
    assert len(warnings) == 1
    assert "Broken.php" in warnings[0]
    assert any("read failed" in record.getMessage() for record in caplog.records)
