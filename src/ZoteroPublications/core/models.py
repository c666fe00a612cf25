from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping, Optional

# Records are plain mappings in Zotero API shape:
#   {"key": "ABCD1234", "data": {"itemType": "book", "title": ..., ...}, ...}
Record = Mapping[str, Any]

EXPAND_ALL = "all"


class InvalidRecordError(ValueError):
    """Raised when a record lacks a field required for grouping."""


class RecordNotFoundError(LookupError):
    """Raised when no record matches a requested key."""


class UnimplementedError(NotImplementedError):
    """Raised by grouping modes that are declared but not available."""


class GroupingMode(IntEnum):
    """How a record store arranges its view."""

    NONE = 0
    BY_TYPE = 1
    BY_COLLECTION = 2


@dataclass(slots=True)
class Bucket:
    """A named group of records sharing one type classifier.

    Attributes:
        key: Type classifier shared by every record in the bucket (e.g. "book").
        items: Records in bucket order.
        expanded: Whether the group should appear pre-expanded when rendered.
    """

    key: str
    items: list[Record] = field(default_factory=list)
    expanded: bool = False

    def __len__(self) -> int:
        return len(self.items)


def record_key(record: Record) -> Optional[str]:
    """Return the unique key of a record, or None when missing."""
    return record.get("key")


def record_data(record: Record) -> Mapping[str, Any]:
    """Return the bibliographic payload of a record.

    Zotero API items nest their fields under ``data``; an item without it
    yields an empty mapping.
    """
    data = record.get("data")
    if isinstance(data, Mapping):
        return data
    return {}


def record_type(record: Record) -> Optional[str]:
    """Return the type classifier (``data.itemType``) of a record, or None."""
    item_type = record_data(record).get("itemType")
    return item_type or None
