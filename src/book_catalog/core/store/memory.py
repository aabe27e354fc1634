"""In-process record store for local runs and tests."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from book_catalog.core.errors import StoreError
from book_catalog.core.logging import get_logger
from book_catalog.core.store.base import Key, RangeCondition, Record, RecordStore

logger = get_logger(__name__)


class InMemoryRecordStore(RecordStore):
    """Dict-backed table with the same semantics as the DynamoDB store.

    Records are deep-copied on the way in and out, so callers can never
    mutate stored state by accident.

    Args:
        partition_key: Name of the partition key attribute.
        sort_key: Name of the primary sort key attribute, if any.
        indexes: Secondary index name → sort attribute.  Indexes share the
            table's partition key.
        name: Table name, for logs.
    """

    def __init__(
        self,
        partition_key: str,
        sort_key: str | None = None,
        indexes: dict[str, str] | None = None,
        name: str = "memory",
    ) -> None:
        self.name = name
        self.partition_key = partition_key
        self.sort_key = sort_key
        self.indexes = dict(indexes or {})
        self._items: dict[tuple[Any, ...], Record] = {}

    @property
    def key_attributes(self) -> tuple[str, ...]:
        if self.sort_key:
            return (self.partition_key, self.sort_key)
        return (self.partition_key,)

    def _key_tuple(self, key: Key) -> tuple[Any, ...]:
        try:
            return tuple(key[name] for name in self.key_attributes)
        except KeyError as exc:
            raise StoreError(f"Key for table {self.name} is missing {exc}") from exc

    async def get(self, key: Key) -> Record | None:
        item = self._items.get(self._key_tuple(key))
        return copy.deepcopy(item) if item is not None else None

    async def put(self, record: Record) -> None:
        self._items[self._key_tuple(record)] = copy.deepcopy(record)

    async def update_partial(self, key: Key, attributes: Record) -> Record:
        # Upsert, like DynamoDB UpdateItem
        key_tuple = self._key_tuple(key)
        item = copy.deepcopy(self._items.get(key_tuple, dict(key)))
        item.update(copy.deepcopy(attributes))
        self._items[key_tuple] = item
        return copy.deepcopy(item)

    async def delete(self, key: Key) -> None:
        self._items.pop(self._key_tuple(key), None)

    async def query(
        self,
        partition_value: Any,
        index_name: str | None = None,
        range_condition: RangeCondition | None = None,
    ) -> list[Record]:
        if index_name is not None:
            if index_name not in self.indexes:
                raise StoreError(f"Table {self.name} has no index {index_name!r}")
            order_by = self.indexes[index_name]
        else:
            order_by = self.sort_key

        matches = [
            item
            for item in self._items.values()
            if item.get(self.partition_key) == partition_value
            and (index_name is None or order_by in item)
            and (range_condition is None or range_condition.matches(item))
        ]
        if order_by:
            matches.sort(key=lambda item: item.get(order_by))
        return copy.deepcopy(matches)

    async def scan(self) -> list[Record]:
        return copy.deepcopy(list(self._items.values()))

    async def batch_put(self, records: Iterable[Record]) -> int:
        count = 0
        for record in records:
            await self.put(record)
            count += 1
        logger.debug("memory_batch_put", table=self.name, count=count)
        return count
