"""Shared fixtures for building small content trees."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from contentkit.config import AppConfig


def render_post(body: str = "Some body text.\n", **fields: str) -> str:
    """Render a post with a frontmatter header built from ``fields``."""
    header = "\n".join(f"{key}: {value}" for key, value in fields.items())
    return f"---\n{header}\n---\n{body}"


VALID_FIELDS = {
    "title": "'A valid post'",
    "description": "'Describes the post'",
    "excerpt": "'Short excerpt'",
    "pubDate": "2024-01-01",
    "category": "Tech",
    "difficulty": "beginner",
    "tags": "['python', 'testing']",
}


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Project root with empty content and pages directories."""
    (tmp_path / "src" / "content" / "blog").mkdir(parents=True)
    (tmp_path / "src" / "pages").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def config(site: Path) -> AppConfig:
    return AppConfig().resolved(site)


@pytest.fixture
def write_post(config: AppConfig) -> Callable[..., Path]:
    """Write a post under the content directory and return its path."""

    def _write(name: str, body: str = "Some body text.\n", **fields: str) -> Path:
        path = config.content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        merged = {**VALID_FIELDS, **fields}
        merged = {key: value for key, value in merged.items() if value is not None}
        path.write_text(render_post(body, **merged), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_page(config: AppConfig) -> Callable[[str], Path]:
    def _write(name: str) -> Path:
        path = config.pages_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("---\n---\n<Layout />\n", encoding="utf-8")
        return path

    return _write
