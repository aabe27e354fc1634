"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its
first argument.  The context carries the collaborators the operation may
touch (record stores, validator, identity resolver, translator) plus the
raw credential of the current request.  Collaborators are injected, never
looked up globally, so tests can hand in fakes.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from book_catalog.core.identity import IdentityResolver
from book_catalog.core.shapes import SchemaValidator
from book_catalog.core.store.base import RecordStore
from book_catalog.core.translation import Translator


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        books: Store for the books table (key ``{id}``).
        cast: Store for the cast table (key ``{bookId, name}``).
        validator: Shape validator.
        resolver: Identity resolver for ``credential``.
        translator: Text translation capability.
        credential: Raw credential from the request (header or cookie).
        cast_role_index: Name of the cast index sorted on ``roleName``.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request — ``"api"``, ``"cli"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    books: RecordStore
    cast: RecordStore
    validator: SchemaValidator
    resolver: IdentityResolver
    translator: Translator
    credential: str | None = None
    cast_role_index: str = "roleIx"
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)
