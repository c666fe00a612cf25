"""Record store with optional grouping.

Wraps a flat sequence of Zotero records and exposes the same iteration
protocol whether the records are flat or grouped into buckets.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from ZoteroPublications.core.models import (
    EXPAND_ALL,
    Bucket,
    GroupingMode,
    InvalidRecordError,
    Record,
    RecordNotFoundError,
    UnimplementedError,
    record_key,
    record_type,
)
from ZoteroPublications.utils.log import log


class RecordStore:
    """Store, group and iterate Zotero records.

    Iterating a store that was never grouped yields records in their original
    order. Once grouped, iteration yields ``(bucket_key, bucket)`` pairs.
    """

    def __init__(self, records: Iterable[Record]) -> None:
        """Initialize the store.

        Args:
            records: Records to encapsulate. Their shape is not validated here.
        """
        self.raw: tuple[Record, ...] = tuple(records)
        self.view: Sequence[Record] | dict[str, Bucket] = self.raw
        self.mode = GroupingMode.NONE

    def group_by_type(self, expand: str | Iterable[str] | None = None) -> None:
        """Group records by their ``itemType``.

        Records are scanned from last to first, so buckets appear in the order
        their type is first met from the end, and each bucket lists its records
        in reverse of their original order.

        Args:
            expand: Types whose groups should appear pre-expanded. The string
                ``"all"`` expands every group; any other single string is
                treated as one type.

        Raises:
            InvalidRecordError: If a record has no ``itemType``. The store is
                left unchanged.
        """
        expand_all, expand_keys = _normalize_expand(expand)

        buckets: dict[str, Bucket] = {}
        for record in reversed(self.raw):
            item_type = record_type(record)
            if not item_type:
                raise InvalidRecordError(f"Record {record_key(record)!r} has no itemType")
            bucket = buckets.get(item_type)
            if bucket is None:
                bucket = Bucket(key=item_type, expanded=expand_all or item_type in expand_keys)
                buckets[item_type] = bucket
            bucket.items.append(record)

        self.view = buckets
        self.mode = GroupingMode.BY_TYPE
        log.debug("Grouped %d records into %d types", len(self.raw), len(buckets))

    def group_by_collections(self) -> None:
        """Group records by top-level collection.

        Raises:
            UnimplementedError: Always.
        """
        raise UnimplementedError("group_by_collections is not implemented")

    def iterate(self) -> Iterator[Record] | Iterator[tuple[str, Bucket]]:
        """Return a fresh iterator over the current view."""
        if self.mode == GroupingMode.NONE:
            return iter(self.raw)
        return iter(self.view.items())

    def __iter__(self) -> Iterator[Record] | Iterator[tuple[str, Bucket]]:
        return self.iterate()

    def __len__(self) -> int:
        return len(self.view)

    @property
    def grouped(self) -> bool:
        return self.mode != GroupingMode.NONE

    def find(self, key: str) -> Record:
        """Return the first record whose ``key`` equals ``key``.

        This is a linear scan over the raw records; duplicate keys resolve to
        the earliest record.

        Raises:
            RecordNotFoundError: If no record has this key.
        """
        for record in self.raw:
            if record_key(record) == key:
                return record
        raise RecordNotFoundError(f"No record with key {key!r}")


def _normalize_expand(expand: str | Iterable[str] | None) -> tuple[bool, frozenset[str]]:
    if not expand:
        return False, frozenset()
    if isinstance(expand, str):
        if expand == EXPAND_ALL:
            return True, frozenset()
        return False, frozenset((expand,))
    return False, frozenset(expand)
