"""
Shared pytest fixtures for book-catalog tests.

This module provides:
- In-memory record stores that count every call
- A fake translator that counts upstream calls and can be made to fail
- Token helpers for building caller credentials
- Ready-wired ``CatalogServices`` / ``OperationContext`` fixtures
"""

from __future__ import annotations

from collections import Counter
from typing import Any

import jwt
import pytest

from book_catalog.core.errors import StoreError, TranslationError
from book_catalog.core.identity import UnverifiedTokenResolver
from book_catalog.core.shapes import SchemaValidator
from book_catalog.core.store.memory import InMemoryRecordStore
from book_catalog.ops.context import OperationContext
from book_catalog.services import CatalogServices

TOKEN_SECRET = "book-catalog-test-secret-0123456789abcdef"


def make_token(sub: str | None = "u1", **claims: Any) -> str:
    """Encode a JWT carrying *sub* (omitted when ``None``)."""
    payload = dict(claims)
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, TOKEN_SECRET, algorithm="HS256")


# =============================================================================
# Fakes
# =============================================================================


class CountingStore(InMemoryRecordStore):
    """In-memory store that records how often each method is called."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.calls: Counter[str] = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def get(self, key):
        self.calls["get"] += 1
        return await super().get(key)

    async def put(self, record):
        self.calls["put"] += 1
        return await super().put(record)

    async def update_partial(self, key, attributes):
        self.calls["update_partial"] += 1
        return await super().update_partial(key, attributes)

    async def delete(self, key):
        self.calls["delete"] += 1
        return await super().delete(key)

    async def query(self, partition_value, index_name=None, range_condition=None):
        self.calls["query"] += 1
        return await super().query(partition_value, index_name, range_condition)

    async def scan(self):
        self.calls["scan"] += 1
        return await super().scan()


class FailingStore(InMemoryRecordStore):
    """Store whose every call blows up."""

    async def get(self, key):
        raise RuntimeError("store unavailable")

    async def scan(self):
        raise RuntimeError("store unavailable")

    async def query(self, partition_value, index_name=None, range_condition=None):
        raise RuntimeError("store unavailable")

    async def batch_put(self, records):
        raise RuntimeError("store unavailable")


class WriteFailingStore(CountingStore):
    """Counting store whose writes blow up once ``fail_writes`` is set.

    Reads keep working, so a test can seed records first and then switch
    writes off.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.fail_writes = False

    def _check(self) -> None:
        if self.fail_writes:
            raise StoreError("write rejected")

    async def put(self, record):
        self._check()
        return await super().put(record)

    async def update_partial(self, key, attributes):
        self._check()
        return await super().update_partial(key, attributes)

    async def delete(self, key):
        self._check()
        return await super().delete(key)


class FakeTranslator:
    """Deterministic translator: ``"Dune"`` → ``"[fr] Dune"``."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail_on = fail_on

    async def translate(self, text: str, target_language: str) -> str:
        self.calls.append((text, target_language))
        if self.fail_on is not None and self.fail_on in text:
            raise TranslationError("Error translating text")
        return f"[{target_language}] {text}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture()
def books_store() -> CountingStore:
    return CountingStore("id", name="Books")


@pytest.fixture()
def cast_store() -> CountingStore:
    return CountingStore(
        "bookId", sort_key="name", indexes={"roleIx": "roleName"}, name="BookCast"
    )


@pytest.fixture()
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture()
def services(books_store, cast_store, translator) -> CatalogServices:
    """Services wired to in-memory stores and the fake translator."""
    return CatalogServices(
        books=books_store,
        cast=cast_store,
        validator=SchemaValidator(),
        resolver=UnverifiedTokenResolver(),
        translator=translator,
    )


@pytest.fixture()
def ctx(services) -> OperationContext:
    """Anonymous OperationContext (no credential)."""
    return services.context(caller="test")


@pytest.fixture()
def as_user(services):
    """Factory: ``as_user("u1")`` → OperationContext carrying u1's token."""

    def _make(sub: str) -> OperationContext:
        return services.context(credential=make_token(sub), caller="test")

    return _make


@pytest.fixture()
def token_for():
    """Factory: ``token_for("u1")`` → encoded JWT with ``sub=u1``."""
    return make_token


@pytest.fixture()
def failing_store() -> FailingStore:
    return FailingStore("id", name="Broken")


@pytest.fixture()
def write_failing_store(services) -> WriteFailingStore:
    """Books store (installed on ``services``) whose writes can be switched off."""
    store = WriteFailingStore("id", name="Books")
    services.books = store
    return store
