"""Record store backends."""

from book_catalog.core.store.base import Key, RangeCondition, Record, RecordStore
from book_catalog.core.store.memory import InMemoryRecordStore

__all__ = ["InMemoryRecordStore", "Key", "RangeCondition", "Record", "RecordStore"]
