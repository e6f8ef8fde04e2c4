"""Markdown link extraction and validation."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Set
from urllib.parse import urlsplit

from contentkit.config import AppConfig
from contentkit.ingestion.frontmatter import parse_frontmatter
from contentkit.models import ContentDocument, LinkReference, ValidationResult
from contentkit.utils.files import iter_content_paths, strip_extension

LOGGER = logging.getLogger(__name__)

LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def extract_links(text: str, path: Path, *, line_offset: int = 1) -> List[LinkReference]:
    """Find every ``[text](url)`` link in ``text``.

    ``line_offset`` is the file line on which ``text`` starts.
    """
    links: List[LinkReference] = []
    for match in LINK_PATTERN.finditer(text):
        line = line_offset + text.count("\n", 0, match.start())
        links.append(LinkReference(text=match.group(1), url=match.group(2), path=path, line=line))
    return links


def is_valid_url(url: str) -> bool:
    """Syntactic check for an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(url.strip())
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return False
    return not any(char.isspace() for char in parts.netloc)


def build_document_namespace(content_root: Path, extensions: Iterable[str]) -> Set[str]:
    """Slugs of every content document under ``content_root``."""
    extensions = tuple(extensions)
    return {
        strip_extension(path.relative_to(content_root), extensions)
        for path in iter_content_paths(content_root, extensions)
    }


def build_page_namespace(pages_root: Path, page_extensions: Iterable[str]) -> Set[str]:
    """Identifiers of every site page, e.g. ``about`` or ``projects/index``."""
    if not pages_root.is_dir():
        LOGGER.warning("Pages directory not found: %s", pages_root)
        return set()
    page_extensions = tuple(page_extensions)
    return {
        strip_extension(path.relative_to(pages_root), page_extensions)
        for path in iter_content_paths(pages_root, page_extensions)
    }


def _clean_internal(url: str) -> str:
    target = url.strip()
    if target.startswith("/"):
        target = target[1:]
    target = target.split("#", 1)[0].split("?", 1)[0].rstrip("/")
    for suffix in (".mdx", ".md"):
        if target.endswith(suffix):
            return target[: -len(suffix)]
    return target


class LinkChecker:
    """Resolves links against the document and page namespaces."""

    def __init__(self, config: AppConfig, documents: Set[str], pages: Set[str]) -> None:
        self.config = config
        self.documents = documents
        self.pages = pages

    @classmethod
    def from_config(cls, config: AppConfig) -> "LinkChecker":
        documents = build_document_namespace(config.content_dir, config.extensions)
        pages = build_page_namespace(config.pages_dir, config.page_extensions)
        LOGGER.debug("Known documents: %d, known pages: %d", len(documents), len(pages))
        return cls(config, documents, pages)

    def is_placeholder(self, url: str) -> bool:
        return any(pattern in url for pattern in self.config.placeholder_patterns)

    def check_link(self, link: LinkReference) -> Optional[str]:
        """Return an error message for a broken link, ``None`` if it is valid."""
        if link.kind == "anchor":
            return None

        if link.kind == "external":
            if is_valid_url(link.url):
                return None
            return f"Invalid external URL: {link.url}"

        if self.is_placeholder(link.url):
            return None

        target = _clean_internal(link.url)
        prefix = self.config.content_prefix
        if prefix and target.startswith(prefix):
            if target[len(prefix):] in self.documents:
                return None
            return f"Broken internal link: {link.url} (file not found)"

        index_page = f"{target}/index" if target else "index"
        if target in self.pages or index_page in self.pages:
            return None
        return f"Broken internal link: {link.url} (page not found)"

    def check_document(self, document: ContentDocument) -> ValidationResult:
        result = ValidationResult()
        frontmatter = parse_frontmatter(document.text)
        if frontmatter is None:
            links = extract_links(document.text, document.path)
        else:
            links = extract_links(frontmatter.body, document.path, line_offset=frontmatter.body_line)

        for link in links:
            message = self.check_link(link)
            if message is not None:
                result.error(message, link.path, link.line)
        return result


def check_links(documents: Iterable[ContentDocument], checker: LinkChecker) -> ValidationResult:
    """Check the links of every document and collect all broken ones."""
    result = ValidationResult()
    for document in documents:
        result.extend(checker.check_document(document))
    return result
