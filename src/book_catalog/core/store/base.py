"""Record store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

Record = dict[str, Any]
Key = dict[str, Any]


@dataclass(frozen=True, slots=True)
class RangeCondition:
    """Condition on the sort attribute of a query.

    Only prefix matching is needed by the catalog.
    """

    attribute: str
    value: str
    operator: Literal["begins_with"] = "begins_with"

    def matches(self, record: Record) -> bool:
        candidate = record.get(self.attribute)
        return isinstance(candidate, str) and candidate.startswith(self.value)


class RecordStore(ABC):
    """Key-value table of records.

    One store instance wraps one table.  Implementations must be safe to
    share between concurrent requests.  Unexpected backend failures are
    raised as :class:`~book_catalog.core.errors.StoreError`.
    """

    @property
    @abstractmethod
    def key_attributes(self) -> tuple[str, ...]:
        """Names of the primary key attributes (partition first)."""
        ...

    @abstractmethod
    async def get(self, key: Key) -> Record | None:
        """Fetch one record, or ``None`` if absent."""
        ...

    @abstractmethod
    async def put(self, record: Record) -> None:
        """Write a whole record, overwriting any existing one with the same key."""
        ...

    @abstractmethod
    async def update_partial(self, key: Key, attributes: Record) -> Record:
        """Set the given top-level attributes in a single write.

        Attributes not named are left untouched.  Returns the record as
        stored after the update.
        """
        ...

    @abstractmethod
    async def delete(self, key: Key) -> None:
        """Remove a record.  Removing an absent record is not an error."""
        ...

    @abstractmethod
    async def query(
        self,
        partition_value: Any,
        index_name: str | None = None,
        range_condition: RangeCondition | None = None,
    ) -> list[Record]:
        """Return all records in a partition, optionally narrowed by a range condition."""
        ...

    @abstractmethod
    async def scan(self) -> list[Record]:
        """Return every record in the table."""
        ...

    @abstractmethod
    async def batch_put(self, records: Iterable[Record]) -> int:
        """Write many records.  Returns the number written."""
        ...

    def key_of(self, record: Record) -> Key:
        """Extract the primary key of *record*."""
        return {name: record[name] for name in self.key_attributes}
