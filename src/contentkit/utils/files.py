"""Utility helpers for working with content files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def require_directory(root: Path) -> Path:
    """Return ``root`` if it is an existing directory, raise otherwise."""
    if not root.is_dir():
        raise FileNotFoundError(f"Content directory not found: {root}")
    return root


def iter_content_paths(root: Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield files under ``root`` whose suffix matches ``extensions``, descending into directories."""
    suffixes = {ext.lower() for ext in extensions}
    for item in sorted(root.rglob("*")):
        if item.is_file() and item.suffix.lower() in suffixes:
            yield item


def strip_extension(relative: Path, extensions: Iterable[str]) -> str:
    """Turn a relative file path into a posix identifier without its extension."""
    identifier = relative.as_posix()
    suffix = relative.suffix
    if suffix.lower() in {ext.lower() for ext in extensions}:
        identifier = identifier[: -len(suffix)]
    return identifier
