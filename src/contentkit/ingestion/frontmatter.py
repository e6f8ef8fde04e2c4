"""Metadata header parsing and document loading.

A document starts with a ``---`` marker line, a block of ``key: value`` lines
and a closing ``---`` line. Everything after the closing marker is the body.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from contentkit.models import ContentDocument, FieldValue, Frontmatter
from contentkit.utils.files import strip_extension

LOGGER = logging.getLogger(__name__)

MARKER = "---"

_FIELD_LINE = re.compile(r"^(\w+):\s*(.*)$")
_QUOTES = "\"'"


class ListDecodeError(ValueError):
    """Raised when a list literal cannot be decoded in strict mode."""


def decode_list(value: str, *, strict: bool = False) -> List[str]:
    """Decode a JSON-like list literal, tolerating single-quoted strings.

    In lenient mode any failure yields an empty list. In strict mode a syntax
    error or a non-list result raises ``ListDecodeError``.
    """
    try:
        decoded = json.loads(value.replace("'", '"'))
    except (TypeError, ValueError) as exc:
        if strict:
            raise ListDecodeError(f"Invalid list literal: {value}") from exc
        return []

    if not isinstance(decoded, list):
        if strict:
            raise ListDecodeError(f"Expected a list, got: {value}")
        return []
    return [str(item) for item in decoded]


def _strip_quotes(value: str) -> str:
    if value and value[0] in _QUOTES:
        value = value[1:]
    if value and value[-1] in _QUOTES:
        value = value[:-1]
    return value


def parse_frontmatter(text: str) -> Optional[Frontmatter]:
    """Parse the metadata header at the top of ``text``.

    Returns ``None`` when the text has no header, including when the opening
    marker is never closed.
    """
    lines = text.split("\n")
    if not lines or lines[0].rstrip() != MARKER:
        return None

    fields: Dict[str, FieldValue] = {}
    raw: Dict[str, str] = {}

    for number, line in enumerate(lines[1:], start=2):
        line = line.rstrip("\r")
        if line.rstrip() == MARKER:
            body = "\n".join(lines[number:])
            return Frontmatter(fields=fields, raw=raw, body=body, body_line=number + 1)

        match = _FIELD_LINE.match(line.strip())
        if not match:
            continue
        key, value = match.group(1), match.group(2).strip()
        if value.startswith("["):
            raw[key] = value
            fields[key] = decode_list(value)
        else:
            raw[key] = fields[key] = _strip_quotes(value)

    LOGGER.debug("Header opened but never closed")
    return None


def document_slug(
    path: Path, content_root: Path, extensions: Tuple[str, ...] = (".md", ".mdx")
) -> str:
    """Identifier of a document: its path under the content root without extension."""
    return strip_extension(path.relative_to(content_root), extensions)


def load_document(
    path: Path, content_root: Path, extensions: Tuple[str, ...] = (".md", ".mdx")
) -> ContentDocument:
    """Read a content file into a ``ContentDocument``.

    Bytes that are not valid UTF-8 are replaced with U+FFFD.
    """
    text = path.read_text(encoding="utf-8", errors="replace")
    return ContentDocument(
        path=path,
        slug=document_slug(path, content_root, extensions),
        text=text,
    )
