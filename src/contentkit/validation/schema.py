"""Metadata header validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from contentkit.config import AppConfig
from contentkit.ingestion.frontmatter import ListDecodeError, decode_list, parse_frontmatter
from contentkit.models import ContentDocument, Frontmatter, ValidationResult
from contentkit.utils.dates import parse_date
from contentkit.validation.links import is_valid_url

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "pubDate", "category")
RECOMMENDED_FIELDS = ("excerpt", "difficulty", "tags")


def _is_integer(value: str) -> bool:
    try:
        int(value)
    except ValueError:
        return False
    return True


def validate_frontmatter(frontmatter: Frontmatter, path: Path, config: AppConfig) -> ValidationResult:
    """Apply every schema rule to a parsed header.

    Rules are independent: a failing rule never hides the outcome of another.
    """
    result = ValidationResult()

    for name in REQUIRED_FIELDS:
        if not frontmatter.has(name):
            result.error(f"Missing required field '{name}'", path)

    category = frontmatter.text("category")
    if category is not None and category not in config.categories:
        result.error(
            f"Invalid category '{category}'. Valid categories: {', '.join(config.categories)}",
            path,
        )

    difficulty = frontmatter.text("difficulty")
    if difficulty is not None and difficulty not in config.difficulties:
        result.error(
            f"Invalid difficulty '{difficulty}'. Valid difficulties: {', '.join(config.difficulties)}",
            path,
        )

    for name in ("pubDate", "updatedDate"):
        value = frontmatter.text(name)
        if value is not None and parse_date(value) is None:
            result.error(f"Invalid {name} format: {value}", path)

    series = frontmatter.text("series")
    part = frontmatter.text("part")
    if series is not None and part is None:
        result.warning(f"Post has series '{series}' but no part number", path)
    if part is not None and series is None:
        result.error(f"Post has part number {part} but no series", path)
    if part is not None and not _is_integer(part):
        result.error(f"Part must be an integer, got '{part}'", path)

    tags = frontmatter.text("tags")
    if tags is not None:
        try:
            decode_list(tags, strict=True)
        except ListDecodeError as exc:
            result.error(f"Invalid tags format: {exc}", path)

    canonical = frontmatter.text("canonical")
    if canonical is not None and not is_valid_url(canonical):
        result.error(f"Invalid canonical URL: {canonical}", path)

    for name in RECOMMENDED_FIELDS:
        if not frontmatter.has(name):
            result.warning(f"Missing recommended field '{name}'", path)

    return result


def validate_document(document: ContentDocument, config: AppConfig) -> ValidationResult:
    frontmatter = parse_frontmatter(document.text)
    if frontmatter is None:
        result = ValidationResult()
        result.error("No frontmatter found", document.path)
        return result
    return validate_frontmatter(frontmatter, document.path, config)


def validate_documents(documents: Iterable[ContentDocument], config: AppConfig) -> ValidationResult:
    """Validate every document and collect all violations."""
    result = ValidationResult()
    count = 0
    for document in documents:
        LOGGER.debug("Validating %s", document.path)
        result.extend(validate_document(document, config))
        count += 1
    LOGGER.info("Validated %d documents", count)
    return result
