"""Report models for per-page and aggregate check results."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from core.scan.models import Occurrence, ResolutionRule, class_key, id_key
from core.scan.scanner import ScanStrategy


class MissingItems(BaseModel):
    """Expected ids/classes with no occurrence."""

    model_config = ConfigDict(extra="forbid")

    ids: list[str] = Field(default_factory=list)
    classes: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.ids and not self.classes


class PageReport(BaseModel):
    """Check result for one page.

    Rules:
    - found holds one key per expected item: ``id:<name>`` / ``class:<name>``
    - missing is derived from found on every access and never stored
    """

    model_config = ConfigDict(extra="forbid")

    expected_ids: list[str] = Field(default_factory=list)
    expected_classes: list[str] = Field(default_factory=list)
    matched_files: list[str] = Field(default_factory=list)
    resolution: ResolutionRule = "none"
    found: dict[str, list[Occurrence]] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def missing(self) -> MissingItems:
        return MissingItems(
            ids=[name for name in self.expected_ids if not self.found.get(id_key(name))],
            classes=[
                name for name in self.expected_classes if not self.found.get(class_key(name))
            ],
        )

    def add_occurrences(self, occurrences: dict[str, list[Occurrence]]) -> None:
        """Append occurrences for expected items; unknown keys are ignored."""

        for key, items in occurrences.items():
            if key in self.found:
                self.found[key].extend(items)


class AggregateReport(BaseModel):
    """Whole-run report serialized to report.json."""

    model_config = ConfigDict(extra="forbid")

    scanned_folder: str
    scanned_files_count: int
    auxiliary_source: str | None = None
    strategy: ScanStrategy = "pattern"
    case_sensitive: bool = False
    pages: dict[str, PageReport] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    timestamp: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> dict[str, MissingItems]:
        return summarize(self)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return not self.summary


def summarize(report: AggregateReport) -> dict[str, MissingItems]:
    """Return the missing items of every page that has any, in page order."""

    summary: dict[str, MissingItems] = {}
    for page_key, page in report.pages.items():
        missing = page.missing
        if not missing.is_empty():
            summary[page_key] = missing
    return summary
