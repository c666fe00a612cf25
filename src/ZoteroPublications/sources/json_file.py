"""Load Zotero records from JSON exports.

Accepts the body of a Zotero Web API ``/items`` response (a JSON array of
items) or an object wrapping that array under ``items``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ZoteroPublications.core.models import Record
from ZoteroPublications.utils.log import log


class RecordSourceError(RuntimeError):
    """Raised when a record file cannot be read or has the wrong shape."""


def load_records(filepath: str | Path) -> list[Record]:
    """Load records from a JSON file.

    Args:
        filepath: Path to the JSON file.

    Returns:
        Records in file order.

    Raises:
        RecordSourceError: If the file is unreadable, not JSON, or not a list
            of objects.
    """
    path = Path(filepath)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordSourceError(f"Failed to read records: {path}") from exc

    try:
        data: Any = json.loads(content)
    except json.JSONDecodeError as exc:
        raise RecordSourceError(f"Invalid JSON in {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise RecordSourceError(f"{path} must contain a list of items")

    records: list[Record] = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise RecordSourceError(f"{path}: item {idx} must be an object")
        records.append(item)

    log.info("Loaded %d records from %s", len(records), path)
    return records
