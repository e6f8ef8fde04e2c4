"""Search index generation pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from contentkit.config import AppConfig
from contentkit.ingestion.frontmatter import decode_list, load_document, parse_frontmatter
from contentkit.models import Frontmatter, SearchIndexEntry, ValidationResult
from contentkit.utils.dates import parse_date
from contentkit.utils.text import estimate_reading_time
from contentkit.validation.schema import REQUIRED_FIELDS

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexBuildResult:
    entries: List[SearchIndexEntry] = field(default_factory=list)
    diagnostics: ValidationResult = field(default_factory=ValidationResult)

    @property
    def skipped(self) -> int:
        return len(self.diagnostics.warnings)


def _tags(frontmatter: Frontmatter) -> List[str]:
    value = frontmatter.get("tags")
    if isinstance(value, list):
        return value
    if value:
        return decode_list(value)
    return []


def _part(frontmatter: Frontmatter) -> Optional[int]:
    value = frontmatter.text("part")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        LOGGER.debug("Ignoring non-numeric part %r", value)
        return None


class SearchIndexBuilder:
    """Turns a set of content files into sorted search index entries."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def build(self, paths: Sequence[Path]) -> IndexBuildResult:
        """Build entries for every usable document, newest first.

        Problems with a single file are recorded as warnings and never stop
        the remaining files from being indexed.
        """
        result = IndexBuildResult()
        dated: List[Tuple[datetime, SearchIndexEntry]] = []

        for path in paths:
            try:
                LOGGER.debug("Processing: %s", path)
                item = self._build_single(path, result.diagnostics)
            except Exception as exc:
                LOGGER.error("Failed to process %s: %s", path, exc)
                result.diagnostics.warning(f"Skipped: {exc}", path)
                continue
            if item is not None:
                dated.append(item)

        # Stable sort: equal dates keep enumeration order.
        dated.sort(key=lambda item: item[0], reverse=True)
        result.entries = [entry for _, entry in dated]
        return result

    def _build_single(
        self, path: Path, diagnostics: ValidationResult
    ) -> Optional[Tuple[datetime, SearchIndexEntry]]:
        document = load_document(path, self.config.content_dir, self.config.extensions)
        frontmatter = parse_frontmatter(document.text)
        if frontmatter is None:
            diagnostics.warning("No frontmatter found", path)
            return None

        missing = [name for name in REQUIRED_FIELDS if not frontmatter.has(name)]
        if missing:
            diagnostics.warning(f"Missing required fields: {', '.join(missing)}", path)
            return None

        pub_date = frontmatter.text("pubDate")
        published = parse_date(pub_date)
        if published is None:
            diagnostics.warning(f"Invalid pubDate format: {pub_date}", path)
            return None

        description = frontmatter.text("description")
        entry = SearchIndexEntry(
            slug=document.slug,
            title=frontmatter.text("title"),
            description=description,
            excerpt=frontmatter.text("excerpt") or description,
            tags=_tags(frontmatter),
            category=frontmatter.text("category"),
            pub_date=pub_date,
            difficulty=frontmatter.text("difficulty"),
            series=frontmatter.text("series"),
            part=_part(frontmatter),
            updated_date=frontmatter.text("updatedDate"),
            reading_time=estimate_reading_time(
                frontmatter.body, self.config.words_per_minute
            ).minutes,
        )
        return published, entry
