"""ZoteroPublications: display Zotero records as grouped, navigable markup."""

from __future__ import annotations

from ZoteroPublications.core.models import (
    Bucket,
    GroupingMode,
    InvalidRecordError,
    RecordNotFoundError,
    UnimplementedError,
)
from ZoteroPublications.core.store import RecordStore

__all__ = [
    "Bucket",
    "GroupingMode",
    "InvalidRecordError",
    "RecordNotFoundError",
    "RecordStore",
    "UnimplementedError",
]
