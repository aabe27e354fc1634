"""Tests for seed loading."""

import json
from importlib.resources import files

import pytest

from book_catalog.core.errors import ErrorCode
from book_catalog.ops.seed import load_seed_file, seed_catalog


class TestLoadSeedFile:
    def test_packaged_samples(self):
        books = load_seed_file(str(files("book_catalog") / "seed" / "books.json"))
        cast = load_seed_file(str(files("book_catalog") / "seed" / "cast.json"))
        assert all("id" in b and "title" in b for b in books)
        assert all({"bookId", "name", "roleName"} <= set(m) for m in cast)

    def test_rejects_non_array(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text(json.dumps({"id": 1}))
        with pytest.raises(ValueError):
            load_seed_file(path)


class TestSeedCatalog:
    @pytest.mark.asyncio
    async def test_writes_both_tables(self, ctx, books_store, cast_store):
        result = await seed_catalog(
            ctx,
            [{"id": 1, "title": "Dune"}, {"id": 2, "title": "Emma"}],
            [{"bookId": 1, "name": "Paul Atreides", "roleName": "Protagonist"}],
        )
        assert result.data == {"books": 2, "cast": 1}
        assert len(await books_store.scan()) == 2
        assert len(await cast_store.query(1)) == 1

    @pytest.mark.asyncio
    async def test_missing_keys_write_nothing(self, ctx, books_store, cast_store):
        result = await seed_catalog(
            ctx,
            [{"id": 1, "title": "Dune"}, {"title": "No id"}],
            [{"bookId": 1}],
        )
        assert result.code == ErrorCode.VALIDATION_FAILED
        assert result.error.details == {
            "books": [{"index": 1, "missing": ["id"]}],
            "cast": [{"index": 0, "missing": ["name"]}],
        }
        assert books_store.total_calls == 0
        assert cast_store.total_calls == 0

    @pytest.mark.asyncio
    async def test_store_failure(self, services, failing_store):
        services.books = failing_store
        result = await seed_catalog(services.context(), [{"id": 1, "title": "Dune"}])
        assert result.code == ErrorCode.STORE_ERROR
