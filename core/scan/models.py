"""Data models for discovered files, candidate resolution, and occurrences."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

ResolutionRule = Literal["exact", "prefix", "substring", "fallback", "none"]
OccurrenceSource = Literal["file", "auxiliary"]


@dataclass(frozen=True)
class CandidateFile:
    """One discovered markup file and its full text content."""

    path: Path
    text: str
    read_error: str | None = None

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class CandidateResolution:
    """Files selected for one page and the filename rule that selected them."""

    rule: ResolutionRule
    files: list[CandidateFile] = field(default_factory=list)


@dataclass(frozen=True)
class AuxiliaryText:
    """Extracted text of an auxiliary (non-markup) document."""

    source: str
    text: str = ""


class Occurrence(BaseModel):
    """Evidence that an expected id or class is present."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    file: str
    line: int | None = None
    excerpt: str
    source: OccurrenceSource = "file"


def id_key(name: str) -> str:
    """Report key for an expected identifier."""

    return f"id:{name}"


def class_key(name: str) -> str:
    """Report key for an expected class name."""

    return f"class:{name}"
