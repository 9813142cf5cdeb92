from __future__ import annotations

from core.scan.patterns import (
    class_pattern,
    escape_token,
    id_pattern,
    strip_server_blocks,
    word_pattern,
)


def test_id_pattern_matches_quoted_exact_value() -> None:
    pattern = id_pattern("logo")

    assert pattern.search('<div id="logo">')
    assert pattern.search("<div id = 'logo'>")
    assert not pattern.search('<div id="logo2">')
    assert not pattern.search('<div id="my-logo">')


def test_id_pattern_ignores_longer_attribute_names() -> None:
    pattern = id_pattern("logo")

    assert not pattern.search('<div data-id="logo">')
    assert not pattern.search('<div grid="logo">')


def test_id_pattern_case_sensitivity() -> None:
    assert id_pattern("logo").search('<div ID="Logo">')
    assert not id_pattern("logo", case_sensitive=True).search('<div id="Logo">')


def test_class_pattern_requires_whole_token() -> None:
    pattern = class_pattern("title")

    assert pattern.search('<h2 class="title">')
    assert pattern.search('<h2 class="big title main">')
    assert pattern.search("<h2 class='main title'>")
    assert not pattern.search('<h2 class="article-title">')
    assert not pattern.search('<h2 class="title-bar">')
    assert not pattern.search('<h2 data-class="title">')


def test_metacharacters_are_escaped() -> None:
    assert escape_token("a.b") == r"a\.b"
    assert not id_pattern("a.b").search('<div id="axb">')
    assert id_pattern("c++").search('<div id="c++">')
    assert class_pattern("w-1/2").search('<div class="flex w-1/2">')
    assert word_pattern("(x)").search("value (x) here")


def test_word_pattern_matches_whole_words_only() -> None:
    pattern = word_pattern("tickets")

    assert pattern.search("Buy tickets today")
    assert pattern.search("TICKETS")
    assert not pattern.search("ticketshop")
    assert not word_pattern("tickets", case_sensitive=True).search("TICKETS")


def test_strip_server_blocks_removes_processing_instructions() -> None:
    text = '<div><?php if ($a < 3) { ?>\n<span id="x"></span><?php } ?></div>'

    assert strip_server_blocks(text) == '<div>\n<span id="x"></span></div>'
