"""Search index persistence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from contentkit.models import SearchIndexEntry


def serialize_entries(entries: Sequence[SearchIndexEntry]) -> List[Dict[str, Any]]:
    return [entry.to_dict() for entry in entries]


def write_search_index(entries: Sequence[SearchIndexEntry], output_path: Path) -> Path:
    """Write the index as a JSON array, replacing any previous file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(serialize_entries(entries), indent=2, ensure_ascii=False)
    output_path.write_text(payload, encoding="utf-8")
    return output_path
