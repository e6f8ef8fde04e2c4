"""Tests for the search index builder."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import patch

from conftest import VALID_FIELDS, render_post
from contentkit.config import AppConfig
from contentkit.index.builder import IndexBuildResult, SearchIndexBuilder
from contentkit.ingestion.frontmatter import parse_frontmatter
from contentkit.utils.files import iter_content_paths


def _build(config: AppConfig) -> IndexBuildResult:
    paths = list(iter_content_paths(config.content_dir, config.extensions))
    return SearchIndexBuilder(config).build(paths)


class TestIndexBuildResult:
    """Test IndexBuildResult defaults."""

    def test_init_defaults(self) -> None:
        result = IndexBuildResult()

        assert result.entries == []
        assert result.skipped == 0


class TestSearchIndexBuilder:
    """Test SearchIndexBuilder document pipeline."""

    def test_entry_fields(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        """Should derive every field from the header."""
        write_post(
            "guides/setup.md",
            body="word " * 450,
            series="'Home Lab Basics'",
            part="2",
            updatedDate="2024-02-01",
        )

        result = _build(config)

        assert len(result.entries) == 1
        entry = result.entries[0]
        assert entry.slug == "guides/setup"
        assert entry.title == "A valid post"
        assert entry.description == "Describes the post"
        assert entry.excerpt == "Short excerpt"
        assert entry.tags == ["python", "testing"]
        assert entry.category == "Tech"
        assert entry.difficulty == "beginner"
        assert entry.series == "Home Lab Basics"
        assert entry.part == 2
        assert entry.pub_date == "2024-01-01"
        assert entry.updated_date == "2024-02-01"
        assert entry.reading_time == 3

    def test_optional_fields_default(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        write_post("post.md", excerpt=None, tags=None, difficulty=None)

        entry = _build(config).entries[0]

        assert entry.excerpt == entry.description
        assert entry.tags == []
        assert entry.difficulty is None
        assert entry.series is None
        assert entry.part is None
        assert entry.updated_date is None

    def test_content_uses_final_values(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        """The searchable text is composed after the excerpt fallback."""
        write_post("post.md", excerpt=None)

        entry = _build(config).entries[0]

        assert entry.content == (
            "A valid post Describes the post Describes the post python testing Tech"
        )

    def test_single_quoted_tags(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        write_post("post.md", tags="['a', 'b']")

        assert _build(config).entries[0].tags == ["a", "b"]

    def test_malformed_tags_are_empty(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        """Index building is lenient about tags."""
        write_post("broken.md", tags="[a, b")
        write_post("scalar.md", tags="python")

        result = _build(config)

        assert [entry.tags for entry in result.entries] == [[], []]
        assert result.skipped == 0

    def test_sorted_newest_first(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        """The June post comes before the January one."""
        write_post("january.md", pubDate="2024-01-01")
        write_post("june.md", pubDate="2024-06-01")

        result = _build(config)

        assert [entry.slug for entry in result.entries] == ["june", "january"]

    def test_mixed_date_formats_sort(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        write_post("a.md", pubDate="'Jul 08 2022'")
        write_post("b.md", pubDate="2023-03-01T09:00:00Z")
        write_post("c.md", pubDate="2021-12-31")

        result = _build(config)

        assert [entry.slug for entry in result.entries] == ["b", "a", "c"]
        assert result.entries[1].pub_date == "Jul 08 2022"

    def test_ties_keep_enumeration_order(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        for name in ("a.md", "b.md", "c.md"):
            write_post(name, pubDate="2024-03-03")

        result = _build(config)

        assert [entry.slug for entry in result.entries] == ["a", "b", "c"]

    def test_skips_missing_required_fields(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        """A malformed post is skipped with a warning and the rest are indexed."""
        broken = write_post("broken.md", title=None, category=None)
        write_post("good.md")

        result = _build(config)

        assert [entry.slug for entry in result.entries] == ["good"]
        assert result.skipped == 1
        warning = result.diagnostics.warnings[0]
        assert warning.path == broken
        assert warning.message == "Missing required fields: title, category"
        assert not result.diagnostics.has_errors

    def test_skips_missing_header(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        (config.content_dir / "plain.md").write_text("# No header\n")
        write_post("good.md")

        result = _build(config)

        assert [entry.slug for entry in result.entries] == ["good"]
        assert [w.message for w in result.diagnostics.warnings] == ["No frontmatter found"]

    def test_skips_unparseable_date(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        write_post("bad-date.md", pubDate="someday")
        write_post("good.md")

        result = _build(config)

        assert [entry.slug for entry in result.entries] == ["good"]
        assert result.skipped == 1

    def test_undecodable_bytes_are_replaced(
        self, config: AppConfig, write_post: Callable[..., Path]
    ) -> None:
        """A latin-1 post is still indexed, with U+FFFD for the bad bytes."""
        write_post("good.md")
        text = render_post(**{**VALID_FIELDS, "title": "Caf\xe9"})
        (config.content_dir / "latin1.md").write_bytes(text.encode("latin-1"))

        result = _build(config)

        assert sorted(entry.slug for entry in result.entries) == ["good", "latin1"]
        titles = {entry.slug: entry.title for entry in result.entries}
        assert titles["latin1"] == "Caf\ufffd"
        assert result.skipped == 0

    def test_failure_from_parser_is_isolated(
        self, config: AppConfig, write_post: Callable[..., Path]
    ) -> None:
        write_post("a.md")
        second = write_post("b.md")

        with patch(
            "contentkit.index.builder.parse_frontmatter",
            side_effect=[RuntimeError("boom"), parse_frontmatter(second.read_text(encoding="utf-8"))],
        ):
            result = _build(config)

        assert [entry.slug for entry in result.entries] == ["b"]
        assert result.diagnostics.warnings[0].message == "Skipped: boom"

    def test_custom_reading_rate(self, config: AppConfig, write_post: Callable[..., Path]) -> None:
        write_post("post.md", body="word " * 450)
        slow = AppConfig(
            content_dir=config.content_dir, pages_dir=config.pages_dir, words_per_minute=100
        )

        assert _build(slow).entries[0].reading_time == 5

    def test_empty_set(self, config: AppConfig) -> None:
        result = _build(config)

        assert result.entries == []
        assert result.skipped == 0
