"""DynamoDB record store backend."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from book_catalog.core.errors import StoreError
from book_catalog.core.logging import get_logger
from book_catalog.core.store.base import Key, RangeCondition, Record, RecordStore

logger = get_logger(__name__)

# DynamoDB BatchWriteItem limit
BATCH_WRITE_LIMIT = 25
BATCH_WRITE_MAX_ATTEMPTS = 5


def create_dynamodb_client(
    region: str,
    endpoint_url: str | None = None,
) -> Any:
    """Build a low-level DynamoDB client with standard retries."""
    client_kwargs: dict[str, Any] = {
        "service_name": "dynamodb",
        "region_name": region,
        "config": Config(retries={"max_attempts": 3, "mode": "standard"}),
    }

    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url

    return boto3.client(**client_kwargs)


def _to_dynamo(value: Any) -> Any:
    """Replace floats with Decimals, recursively (TypeSerializer rejects floats)."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


def _from_dynamo(value: Any) -> Any:
    """Replace Decimals with int (when integral) or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_from_dynamo(v) for v in value]
    return value


class DynamoRecordStore(RecordStore):
    """
    One DynamoDB table behind the :class:`RecordStore` interface.

    Uses the low-level client with explicit (de)serialisation so every
    request is a plain dict.  Every attribute name in an expression goes
    through a placeholder because ``name`` is a DynamoDB reserved word.
    Blocking boto3 calls run in a worker thread.
    """

    def __init__(
        self,
        client: Any,
        table_name: str,
        partition_key: str,
        sort_key: str | None = None,
    ):
        self.client = client
        self.table_name = table_name
        self.partition_key = partition_key
        self.sort_key = sort_key
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

        logger.info(
            "dynamodb_store_initialized",
            table=table_name,
            partition_key=partition_key,
            sort_key=sort_key,
        )

    @property
    def key_attributes(self) -> tuple[str, ...]:
        if self.sort_key:
            return (self.partition_key, self.sort_key)
        return (self.partition_key,)

    # ------------------------------------------------------------------ #
    # (De)serialisation
    # ------------------------------------------------------------------ #

    def _serialize_value(self, value: Any) -> dict[str, Any]:
        return self._serializer.serialize(_to_dynamo(value))

    def _serialize(self, record: Record) -> dict[str, Any]:
        return {k: self._serialize_value(v) for k, v in record.items()}

    def _deserialize(self, item: dict[str, Any]) -> Record:
        return {k: _from_dynamo(self._deserializer.deserialize(v)) for k, v in item.items()}

    # ------------------------------------------------------------------ #
    # Client calls
    # ------------------------------------------------------------------ #

    def _call_sync(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return getattr(self.client, operation)(**kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "dynamodb_call_failed",
                table=self.table_name,
                operation=operation,
                error=str(e),
            )
            raise StoreError(
                f"DynamoDB {operation} on {self.table_name} failed: {e}",
                details={"table": self.table_name, "operation": operation},
                cause=e,
            ) from e

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        return await asyncio.to_thread(self._call_sync, operation, **kwargs)

    # ------------------------------------------------------------------ #
    # RecordStore
    # ------------------------------------------------------------------ #

    async def get(self, key: Key) -> Record | None:
        response = await self._call(
            "get_item",
            TableName=self.table_name,
            Key=self._serialize(key),
        )
        item = response.get("Item")
        return self._deserialize(item) if item else None

    async def put(self, record: Record) -> None:
        await self._call(
            "put_item",
            TableName=self.table_name,
            Item=self._serialize(record),
        )

    async def update_partial(self, key: Key, attributes: Record) -> Record:
        if not attributes:
            current = await self.get(key)
            return current if current is not None else dict(key)

        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        assignments: list[str] = []
        for i, (attr, value) in enumerate(attributes.items()):
            names[f"#a{i}"] = attr
            values[f":v{i}"] = self._serialize_value(value)
            assignments.append(f"#a{i} = :v{i}")

        response = await self._call(
            "update_item",
            TableName=self.table_name,
            Key=self._serialize(key),
            UpdateExpression="SET " + ", ".join(assignments),
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values,
            ReturnValues="ALL_NEW",
        )
        return self._deserialize(response.get("Attributes", {}))

    async def delete(self, key: Key) -> None:
        await self._call(
            "delete_item",
            TableName=self.table_name,
            Key=self._serialize(key),
        )

    async def query(
        self,
        partition_value: Any,
        index_name: str | None = None,
        range_condition: RangeCondition | None = None,
    ) -> list[Record]:
        condition = "#pk = :pk"
        names = {"#pk": self.partition_key}
        values = {":pk": self._serialize_value(partition_value)}

        if range_condition is not None:
            condition += f" AND {range_condition.operator}(#rk, :rk)"
            names["#rk"] = range_condition.attribute
            values[":rk"] = self._serialize_value(range_condition.value)

        kwargs: dict[str, Any] = {
            "TableName": self.table_name,
            "KeyConditionExpression": condition,
            "ExpressionAttributeNames": names,
            "ExpressionAttributeValues": values,
        }
        if index_name is not None:
            kwargs["IndexName"] = index_name

        return await self._paginate("query", **kwargs)

    async def scan(self) -> list[Record]:
        return await self._paginate("scan", TableName=self.table_name)

    async def _paginate(self, operation: str, **kwargs: Any) -> list[Record]:
        records: list[Record] = []
        while True:
            response = await self._call(operation, **kwargs)
            records.extend(self._deserialize(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return records
            kwargs["ExclusiveStartKey"] = last_key

    async def batch_put(self, records: Iterable[Record]) -> int:
        requests = [{"PutRequest": {"Item": self._serialize(r)}} for r in records]

        for start in range(0, len(requests), BATCH_WRITE_LIMIT):
            pending = {self.table_name: requests[start:start + BATCH_WRITE_LIMIT]}
            for _attempt in range(BATCH_WRITE_MAX_ATTEMPTS):
                response = await self._call("batch_write_item", RequestItems=pending)
                pending = response.get("UnprocessedItems") or {}
                if not pending:
                    break
            else:
                raise StoreError(
                    f"batch_write_item on {self.table_name} left unprocessed items",
                    details={"table": self.table_name},
                )

        logger.info("dynamodb_batch_put", table=self.table_name, count=len(requests))
        return len(requests)
