"""
Service wiring — build the collaborators once, hand them to every request.

:func:`build_services` is the only place that decides which store and
translator implementations are used.  The API app and the CLI both call
it; tests construct :class:`CatalogServices` directly with fakes.
"""

from __future__ import annotations

from dataclasses import dataclass

from book_catalog.core.identity import IdentityResolver, UnverifiedTokenResolver
from book_catalog.core.logging import get_logger
from book_catalog.core.settings import BookCatalogSettings
from book_catalog.core.shapes import SchemaValidator
from book_catalog.core.store.base import RecordStore
from book_catalog.core.store.memory import InMemoryRecordStore
from book_catalog.core.translation import AwsTranslator, Translator, create_translate_client
from book_catalog.ops.context import OperationContext

logger = get_logger(__name__)


@dataclass
class CatalogServices:
    """Long-lived collaborators shared by all requests."""

    books: RecordStore
    cast: RecordStore
    validator: SchemaValidator
    resolver: IdentityResolver
    translator: Translator
    cast_role_index: str = "roleIx"

    def context(
        self,
        *,
        credential: str | None = None,
        request_id: str | None = None,
        caller: str = "sdk",
    ) -> OperationContext:
        """Build a request-scoped :class:`OperationContext`."""
        ctx = OperationContext(
            books=self.books,
            cast=self.cast,
            validator=self.validator,
            resolver=self.resolver,
            translator=self.translator,
            credential=credential,
            cast_role_index=self.cast_role_index,
            caller=caller,
        )
        if request_id:
            ctx.request_id = request_id
        return ctx


def build_services(settings: BookCatalogSettings) -> CatalogServices:
    """Construct stores, validator, resolver and translator from settings."""
    if settings.store_backend == "memory":
        books: RecordStore = InMemoryRecordStore("id", name=settings.books_table)
        cast: RecordStore = InMemoryRecordStore(
            "bookId",
            sort_key="name",
            indexes={settings.cast_role_index: "roleName"},
            name=settings.cast_table,
        )
    else:
        from book_catalog.core.store.dynamodb import DynamoRecordStore, create_dynamodb_client

        client = create_dynamodb_client(settings.region, settings.dynamodb_endpoint_url)
        books = DynamoRecordStore(client, settings.books_table, partition_key="id")
        cast = DynamoRecordStore(
            client, settings.cast_table, partition_key="bookId", sort_key="name"
        )

    translator = AwsTranslator(
        create_translate_client(settings.region, settings.translate_endpoint_url)
    )

    logger.info(
        "services_built",
        store_backend=settings.store_backend,
        books_table=settings.books_table,
        cast_table=settings.cast_table,
    )
    return CatalogServices(
        books=books,
        cast=cast,
        validator=SchemaValidator(),
        resolver=UnverifiedTokenResolver(),
        translator=translator,
        cast_role_index=settings.cast_role_index,
    )
