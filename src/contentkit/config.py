"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple

from contentkit.utils.text import DEFAULT_WORDS_PER_MINUTE

DEFAULT_CATEGORIES = ("Tech", "Home Lab", "Finance", "Leadership")
DEFAULT_DIFFICULTIES = ("beginner", "intermediate", "advanced")

# Sample links from the post templates; never resolved.
DEFAULT_PLACEHOLDER_PATTERNS = (
    "full/or/relative/path/of/image",
    "blog-placeholder-about.jpg",
    "example.com",
)


@dataclass(slots=True)
class AppConfig:
    content_dir: Path = Path("src/content/blog")
    pages_dir: Path = Path("src/pages")
    output_path: Path = Path("public/search-index.json")
    categories: Tuple[str, ...] = DEFAULT_CATEGORIES
    difficulties: Tuple[str, ...] = DEFAULT_DIFFICULTIES
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
    extensions: Tuple[str, ...] = (".md", ".mdx")
    page_extensions: Tuple[str, ...] = (".astro",)
    content_prefix: str = "blog/"
    placeholder_patterns: Tuple[str, ...] = DEFAULT_PLACEHOLDER_PATTERNS

    def __post_init__(self) -> None:
        self.content_dir = Path(self.content_dir)
        self.pages_dir = Path(self.pages_dir)
        self.output_path = Path(self.output_path)
        self.categories = tuple(self.categories)
        self.difficulties = tuple(self.difficulties)

    @staticmethod
    def resolve_path(path: Path, base_dir: Path | None = None) -> Path:
        if Path(path).is_absolute() or base_dir is None:
            return Path(path)
        return base_dir / path

    def resolved(self, base_dir: Path | None = None) -> "AppConfig":
        """Return a copy with every path resolved against ``base_dir``."""
        return replace(
            self,
            content_dir=self.resolve_path(self.content_dir, base_dir),
            pages_dir=self.resolve_path(self.pages_dir, base_dir),
            output_path=self.resolve_path(self.output_path, base_dir),
        )
