"""Occurrence scanners: pattern-based and structural strategies."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Literal, Protocol

from bs4 import BeautifulSoup

from core.scan.models import AuxiliaryText, CandidateFile, Occurrence, class_key, id_key
from core.scan.patterns import class_pattern, id_pattern, strip_server_blocks, word_pattern

ScanStrategy = Literal["pattern", "structural", "auto"]
OccurrenceMap = dict[str, list[Occurrence]]

EXCERPT_LIMIT = 160
_AUX_CONTEXT_CHARS = 40
_STRUCTURAL_SUFFIXES = frozenset({".html", ".htm"})


class OccurrenceScanner(Protocol):
    """Protocol for strategies that locate expected ids/classes in one file."""

    name: str

    def scan(
        self, file: CandidateFile, ids: Sequence[str], classes: Sequence[str]
    ) -> OccurrenceMap:
        """Return occurrences keyed by ``id:<name>``/``class:<name>``.

        Items with no occurrence in this file may be absent from the result.
        """


class PatternScanner:
    """Line-by-line regular expression scan of raw markup text.

    Tolerates server-templated markup that would not parse. An attribute split
    across several lines is not found.
    """

    name = "pattern"

    def __init__(self, *, case_sensitive: bool = False) -> None:
        self._case_sensitive = case_sensitive

    def scan(
        self, file: CandidateFile, ids: Sequence[str], classes: Sequence[str]
    ) -> OccurrenceMap:
        checks = [
            (id_key(name), id_pattern(name, case_sensitive=self._case_sensitive))
            for name in ids
        ]
        checks.extend(
            (class_key(name), class_pattern(name, case_sensitive=self._case_sensitive))
            for name in classes
        )

        found: OccurrenceMap = {}
        if not file.text or not checks:
            return found

        lines = file.text.splitlines()
        for key, pattern in checks:
            for line_no, line in enumerate(lines, start=1):
                if pattern.search(line):
                    found.setdefault(key, []).append(
                        Occurrence(file=str(file.path), line=line_no, excerpt=_excerpt(line))
                    )
        return found


class StructuralScanner:
    """Parse markup and check id/class presence on the element tree.

    ``<? ... ?>`` blocks are removed before parsing. Reports presence only,
    without line numbers.
    """

    name = "structural"

    def __init__(self, *, case_sensitive: bool = False) -> None:
        self._fold: Callable[[str], str] = (
            (lambda value: value) if case_sensitive else str.casefold
        )

    def scan(
        self, file: CandidateFile, ids: Sequence[str], classes: Sequence[str]
    ) -> OccurrenceMap:
        found: OccurrenceMap = {}
        if not file.text:
            return found

        present_ids, present_classes = self._collect(file.text)
        for name in ids:
            if self._fold(name) in present_ids:
                found[id_key(name)] = [self._occurrence(file, f'id="{name}"')]
        for name in classes:
            if self._fold(name) in present_classes:
                found[class_key(name)] = [self._occurrence(file, f'class="{name}"')]
        return found

    def _collect(self, text: str) -> tuple[set[str], set[str]]:
        soup = BeautifulSoup(strip_server_blocks(text), "html.parser")
        present_ids: set[str] = set()
        present_classes: set[str] = set()
        for tag in soup.find_all(True):
            tag_id = tag.get("id")
            if isinstance(tag_id, str):
                present_ids.add(self._fold(tag_id))
            tag_classes = tag.get("class")
            if isinstance(tag_classes, str):
                tag_classes = tag_classes.split()
            for token in tag_classes or ():
                present_classes.add(self._fold(token))
        return present_ids, present_classes

    @staticmethod
    def _occurrence(file: CandidateFile, what: str) -> Occurrence:
        return Occurrence(file=str(file.path), line=None, excerpt=f"{what} present in parsed markup")


class AutoScanner:
    """Structural scan for static HTML files, pattern scan for everything else."""

    name = "auto"

    def __init__(self, *, case_sensitive: bool = False) -> None:
        self._structural = StructuralScanner(case_sensitive=case_sensitive)
        self._pattern = PatternScanner(case_sensitive=case_sensitive)

    def scan(
        self, file: CandidateFile, ids: Sequence[str], classes: Sequence[str]
    ) -> OccurrenceMap:
        if file.path.suffix.lower() in _STRUCTURAL_SUFFIXES:
            return self._structural.scan(file, ids, classes)
        return self._pattern.scan(file, ids, classes)


_SCANNERS: dict[str, Callable[..., OccurrenceScanner]] = {
    "auto": AutoScanner,
    "pattern": PatternScanner,
    "structural": StructuralScanner,
}


def create_scanner(strategy: str, *, case_sensitive: bool = False) -> OccurrenceScanner:
    """Instantiate a supported scanning strategy by name."""

    try:
        factory = _SCANNERS[strategy]
    except KeyError as exc:
        raise ValueError(f"Unsupported scan strategy: {strategy}") from exc
    return factory(case_sensitive=case_sensitive)


def list_strategies() -> list[str]:
    """Return supported strategy names in stable order."""

    return sorted(_SCANNERS)


def scan_auxiliary_text(
    auxiliary: AuxiliaryText,
    ids: Sequence[str],
    classes: Sequence[str],
    *,
    case_sensitive: bool = False,
) -> OccurrenceMap:
    """Whole-word search of auxiliary text; one occurrence per matched item."""

    found: OccurrenceMap = {}
    if not auxiliary.text:
        return found

    items = [(id_key(name), name) for name in ids]
    items.extend((class_key(name), name) for name in classes)
    for key, name in items:
        match = word_pattern(name, case_sensitive=case_sensitive).search(auxiliary.text)
        if match is None:
            continue
        start = max(0, match.start() - _AUX_CONTEXT_CHARS)
        end = match.end() + _AUX_CONTEXT_CHARS
        found[key] = [
            Occurrence(
                file=auxiliary.source,
                line=None,
                excerpt=_excerpt(auxiliary.text[start:end]),
                source="auxiliary",
            )
        ]
    return found


def _excerpt(text: str) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) <= EXCERPT_LIMIT:
        return collapsed
    return collapsed[: EXCERPT_LIMIT - 3] + "..."
