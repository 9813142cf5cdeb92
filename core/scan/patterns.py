"""Regular expressions for locating ids and classes in raw text.

Every user-supplied name passes through ``escape_token`` before it is placed in
a pattern; no other module builds patterns from spec values.
"""

from __future__ import annotations

import re

_SERVER_BLOCK_RE = re.compile(r"<\?[\s\S]*?\?>")

# Attribute name must not be the tail of a longer name such as data-id.
_ATTR_BOUNDARY = r"(?<![\w:.-])"


def escape_token(token: str) -> str:
    """Escape a spec-supplied name for literal use inside a pattern."""

    return re.escape(token)


def _flags(case_sensitive: bool) -> int:
    return 0 if case_sensitive else re.IGNORECASE


def id_pattern(name: str, *, case_sensitive: bool = False) -> re.Pattern[str]:
    """Match ``id="name"`` or ``id='name'`` with optional spaces around ``=``."""

    token = escape_token(name)
    return re.compile(
        rf"{_ATTR_BOUNDARY}id\s*=\s*(?:\"{token}\"|'{token}')",
        _flags(case_sensitive),
    )


def class_pattern(name: str, *, case_sensitive: bool = False) -> re.Pattern[str]:
    """Match a class attribute whose value list contains name as a whole token.

    The token must be bounded by whitespace or by the quote edges, so ``title``
    does not match ``class="article-title"``.
    """

    token = escape_token(name)
    double = rf"\"(?:[^\"]*\s)?{token}(?:\s[^\"]*)?\""
    single = rf"'(?:[^']*\s)?{token}(?:\s[^']*)?'"
    return re.compile(
        rf"{_ATTR_BOUNDARY}class\s*=\s*(?:{double}|{single})",
        _flags(case_sensitive),
    )


def word_pattern(name: str, *, case_sensitive: bool = False) -> re.Pattern[str]:
    """Match name as a whole word in free text."""

    return re.compile(rf"(?<!\w){escape_token(name)}(?!\w)", _flags(case_sensitive))


def strip_server_blocks(text: str) -> str:
    """Remove ``<? ... ?>`` blocks that would confuse a markup parser."""

    return _SERVER_BLOCK_RE.sub("", text)
