"""Core contentkit data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

FieldValue = Union[str, List[str]]

ERROR = "error"
WARNING = "warning"


@dataclass(slots=True)
class ContentDocument:
    """A content file read from disk."""

    path: Path
    slug: str
    text: str


@dataclass(slots=True)
class Frontmatter:
    """Metadata header decoded from the top of a document.

    ``fields`` holds decoded values (list literals become lists), ``raw`` the
    scalar text as written in the header.
    """

    fields: Dict[str, FieldValue]
    raw: Dict[str, str]
    body: str = ""
    body_line: int = 1

    def get(self, key: str) -> Optional[FieldValue]:
        return self.fields.get(key)

    def text(self, key: str) -> Optional[str]:
        """Header text of ``key``, or ``None`` when absent or blank."""
        value = self.raw.get(key, "").strip()
        return value or None

    def has(self, key: str) -> bool:
        return self.text(key) is not None


@dataclass(slots=True)
class Violation:
    """A single diagnostic produced by a check."""

    kind: Literal["error", "warning"]
    message: str
    path: Path
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.kind == ERROR

    def location(self, base_dir: Optional[Path] = None) -> str:
        path = self.path
        if base_dir is not None:
            try:
                path = self.path.relative_to(base_dir)
            except ValueError:
                pass
        if self.line is not None:
            return f"{path}:{self.line}"
        return str(path)


@dataclass(slots=True)
class ValidationResult:
    """Ordered collection of violations for one or more documents."""

    violations: List[Violation] = field(default_factory=list)

    def error(self, message: str, path: Path, line: Optional[int] = None) -> None:
        self.violations.append(Violation(ERROR, message, path, line))

    def warning(self, message: str, path: Path, line: Optional[int] = None) -> None:
        self.violations.append(Violation(WARNING, message, path, line))

    def extend(self, other: "ValidationResult") -> None:
        self.violations.extend(other.violations)

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.is_error]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if not v.is_error]

    @property
    def has_errors(self) -> bool:
        return any(v.is_error for v in self.violations)


@dataclass(slots=True)
class ReadingTime:
    """Word count and rounded reading time for a body of text."""

    words: int
    minutes: int
    display: str


@dataclass(slots=True)
class LinkReference:
    """A markdown link found in a document."""

    text: str
    url: str
    path: Path
    line: int

    @property
    def kind(self) -> Literal["anchor", "external", "internal"]:
        if self.url.startswith("#"):
            return "anchor"
        if self.url.startswith(("http://", "https://")):
            return "external"
        return "internal"


@dataclass(slots=True)
class SearchIndexEntry:
    """Normalized record written to the search index."""

    slug: str
    title: str
    description: str
    excerpt: str
    tags: List[str]
    category: str
    pub_date: str
    difficulty: Optional[str] = None
    series: Optional[str] = None
    part: Optional[int] = None
    updated_date: Optional[str] = None
    reading_time: int = 0

    @property
    def content(self) -> str:
        """Searchable text composed from the final field values."""
        return " ".join(
            [self.title, self.description, self.excerpt, " ".join(self.tags), self.category]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.slug,
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "excerpt": self.excerpt,
            "tags": list(self.tags),
            "category": self.category,
            "difficulty": self.difficulty,
            "series": self.series,
            "part": self.part,
            "pubDate": self.pub_date,
            "updatedDate": self.updated_date,
            "readingTime": self.reading_time,
            "content": self.content,
        }
