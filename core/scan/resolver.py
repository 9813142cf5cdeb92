"""Filename heuristics that map a page key to candidate files."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from core.scan.models import CandidateFile, CandidateResolution, ResolutionRule


def page_stem(page_key: str) -> str:
    """Strip the last extension from a page key (``Home.php`` -> ``Home``)."""

    stem, dot, _ = page_key.rpartition(".")
    return stem if dot else page_key


def resolve_candidates(
    page_key: str,
    pool: Sequence[CandidateFile],
    *,
    case_sensitive: bool = False,
) -> CandidateResolution:
    """Select candidate files for a page.

    Rules are tried in order and the first one that yields any file wins:
    exact basename, stem as prefix, stem as substring, then every file in the
    pool. Result order follows the pool; duplicate paths are dropped.
    ``case_sensitive`` applies to the exact rule only; the prefix and substring
    rules always compare case-insensitively.
    """

    key = page_key if case_sensitive else page_key.casefold()
    stem = page_stem(page_key).casefold()

    rules: list[tuple[ResolutionRule, Callable[[CandidateFile], bool]]] = [
        ("exact", lambda item: (item.name if case_sensitive else item.name.casefold()) == key),
    ]
    if stem:
        rules.append(("prefix", lambda item: item.name.casefold().startswith(stem)))
        rules.append(("substring", lambda item: stem in item.name.casefold()))

    for rule, matches in rules:
        selected = _dedupe([item for item in pool if matches(item)])
        if selected:
            return CandidateResolution(rule=rule, files=selected)

    if not pool:
        return CandidateResolution(rule="none", files=[])
    return CandidateResolution(rule="fallback", files=_dedupe(list(pool)))


def _dedupe(files: list[CandidateFile]) -> list[CandidateFile]:
    seen: set[str] = set()
    unique: list[CandidateFile] = []
    for item in files:
        marker = str(item.path)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(item)
    return unique
