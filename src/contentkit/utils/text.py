"""Text helpers including the reading-time estimate."""

from __future__ import annotations

import math
import re

from contentkit.models import ReadingTime

DEFAULT_WORDS_PER_MINUTE = 200

_MARKDOWN_SYNTAX = re.compile(r"[#*_`~\[\]()]")
_WHITESPACE = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Count words once markdown punctuation has been removed."""
    clean = _WHITESPACE.sub(" ", _MARKDOWN_SYNTAX.sub("", text)).strip()
    return len([word for word in clean.split(" ") if word])


def format_reading_time(minutes: int) -> str:
    """Format minutes for display, e.g. ``"5 min read"``."""
    if minutes < 1:
        return "< 1 min read"
    return f"{minutes} min read"


def estimate_reading_time(
    text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
) -> ReadingTime:
    """Estimate how long ``text`` takes to read.

    Minutes are rounded up, so any non-empty text reads in at least one minute.
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")

    words = count_words(text)
    minutes = math.ceil(words / words_per_minute)
    return ReadingTime(words=words, minutes=minutes, display=format_reading_time(minutes))
