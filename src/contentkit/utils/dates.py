"""Lenient date parsing for metadata headers."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

_WRITTEN_FORMATS = (
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
)

# Year-only and unpadded forms: 2024, 2024-3, 2024-1-5
_SHORT_ISO = re.compile(r"^(\d{4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$")


def _parse_short_iso(text: str) -> Optional[datetime]:
    match = _SHORT_ISO.match(text)
    if not match:
        return None
    year, month, day = match.groups()
    try:
        return datetime(int(year), int(month or 1), int(day or 1))
    except ValueError:
        return None


def parse_date(value: str) -> Optional[datetime]:
    """Parse a header date into a naive UTC datetime, or ``None`` if unparseable.

    Accepts ISO 8601 dates and datetimes, year-only and unpadded dates such
    as ``2024`` and ``2024-1-5``, and written forms such as ``Jul 08 2022``
    and ``July 8, 2022``.
    """
    text = (value or "").strip()
    if not text:
        return None

    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        parsed = _parse_short_iso(text)

    if parsed is None:
        for fmt in _WRITTEN_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        else:
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
